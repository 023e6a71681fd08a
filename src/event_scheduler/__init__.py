"""Personal event scheduler: record, search and get reminded about events."""
