"""Self-certifying did:jwk identifiers over a pluggable signature layer."""
