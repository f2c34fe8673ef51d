"""Infrastructure layer.

Implementations of the domain ports: password hashers (bcrypt, argon2), the
SQLAlchemy refresh token repository and the bearer-credential AuthService.
"""
