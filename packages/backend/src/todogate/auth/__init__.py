"""Authentication and authorization.

Learn: Users log in with name/password and receive a signed JWT.
Every item route sits behind the access gate in dependencies.py,
which rejects the request before the handler runs unless the bearer
token validates against the process-wide TokenService.
"""
