"""Multi-list to-do manager served as server-rendered HTML."""
