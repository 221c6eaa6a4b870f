"""Point reads and writes against the record table and the entity table."""
