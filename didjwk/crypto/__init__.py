"""Digital signature algorithms and the JSON Web Key model."""
