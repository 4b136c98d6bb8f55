"""Security package: tokens, passwords, rate limiting and request authorization."""
