"""Blog API client.

A thin wrapper around the Blog API REST endpoints using the
``requests`` library.  The client exposes one method per operation:

* :meth:`get_user` – fetch a single user by its identifier.
* :meth:`list_users_by_age` – users whose age lies within a range.
* :meth:`update_user` – replace name, e‑mail, role and age of a user.
* :meth:`cleanup_inactive_users` – remove users without posts.
* :meth:`create_post` – publish a new post for an author.
* :meth:`update_post` – merge fields into an existing post.
* :meth:`delete_post` – delete a post acting as a given user.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` and ``error`` is a
dictionary with the keys ``status_code`` and ``message``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class BlogAPI:
    """Client for interacting with the Blog API."""

    def __init__(
        self,
        *,
        base_url: str = "http://localhost:3003",
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:3003``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for the server on each request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Dict[str, Any] | None = None,
        json_body: Any | None = None,
        headers: Dict[str, str] | None = None,
    ) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``, etc.).
            path: Path relative to :attr:`base_url` (e.g. ``/posts``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
            headers: Extra request headers.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers or {},
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("message") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # User operations
    # ------------------------------------------------------------------
    def get_user(self, user_id: Any) -> Result:
        return self._request("GET", f"/users/{user_id}")

    def list_users_by_age(self, min_age: Any, max_age: Any) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve users with ``min_age <= age <= max_age``.

        Returns:
            A tuple ``(users, error)``. ``users`` is empty on failure.
        """
        data, error = self._request("GET", "/users/age-range", params={"min": min_age, "max": max_age})
        if error:
            return [], error
        return data or [], None

    def update_user(self, user_id: Any, *, name: str, email: str, role: str, age: int) -> Result:
        """Replace a user's profile.

        Returns:
            A tuple ``(user, error)`` with the updated user record.
        """
        data, error = self._request(
            "PUT",
            f"/users/{user_id}",
            json_body={"name": name, "email": email, "role": role, "age": age},
        )
        if error:
            return None, error
        return data.get("user"), None

    def cleanup_inactive_users(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Remove users that are not admins and have no posts.

        Returns:
            A tuple ``(removed_users, error)``.
        """
        data, error = self._request("DELETE", "/users/cleanup-inactive", params={"confirm": "true"})
        if error:
            return [], error
        return data.get("removedUsers", []), None

    # ------------------------------------------------------------------
    # Post operations
    # ------------------------------------------------------------------
    def create_post(self, *, title: str, content: str, author_id: int) -> Result:
        data, error = self._request(
            "POST",
            "/posts",
            json_body={"title": title, "content": content, "authorId": author_id},
        )
        if error:
            return None, error
        return data.get("post"), None

    def update_post(self, post_id: Any, changes: Dict[str, Any]) -> Result:
        """Merge ``changes`` into a post and return the updated post."""
        data, error = self._request("PATCH", f"/posts/{post_id}", json_body=changes)
        if error:
            return None, error
        return data.get("post"), None

    def delete_post(self, post_id: Any, *, acting_user_id: Any) -> Tuple[bool, Optional[Dict[str, Any]]]:
        """Delete a post as ``acting_user_id``.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", f"/posts/{post_id}", headers={"user-id": str(acting_user_id)})
        if error:
            return False, error
        return True, None
