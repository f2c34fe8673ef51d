"""TeamPulse credential core.

Token issuance and verification, password hashing, bearer-credential
authorization and the error taxonomy of the TeamPulse API.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
