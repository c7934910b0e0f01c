"""
Service layer abstraction.

Each service encapsulates the validation pipeline of a domain.  The
services work on the stores they are given, so the API handlers never
touch the collections directly.
"""
