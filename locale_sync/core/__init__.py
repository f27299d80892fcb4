"""Tree primitives, storage, errors and logging."""
