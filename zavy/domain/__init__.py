"""Pure domain helpers (no I/O): document masks, enums, media URLs, banners."""
