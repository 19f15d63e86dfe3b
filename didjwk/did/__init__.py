"""DID methods backed by a key manager."""
