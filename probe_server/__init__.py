# probe_server
# Multi-port text server with a CSV access log and per-client access report.
