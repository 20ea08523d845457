"""did-method-rest: DID registrar and resolver REST service."""

__version__ = "0.1.0"
