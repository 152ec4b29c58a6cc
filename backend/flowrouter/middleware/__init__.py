# Middleware package init
"""
FlowRouter Backend - Middleware Package
=======================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Routes

    Request ID runs first so the access log line carries the ID; the
    logging middleware sees the final status code on the way back.
"""
