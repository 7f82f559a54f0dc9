"""Internal modules for loadstep-http.

WARNING: Import from ``loadstep_http`` instead; the layout of this package
may change between releases.

Modules:
    dispatch - Dispatch, size accounting and tracing
    http - Shared HTTP client configuration
    json_codec - JSON options and codec
    request - Request builder
"""
