"""User service: create, list and delete users over HTTP."""
