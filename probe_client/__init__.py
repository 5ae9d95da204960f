# probe_client
# Concurrent HTTP port checker: reads IP,Port targets and records open/closed.
