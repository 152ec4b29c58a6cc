# Routes package init
"""
FlowRouter Backend - Routes Package
===================================

Route Inventory:
    - application.py: ApplicationRouter, the catch-all flow router
    - hello.py:       greeting handlers (text/html)
    - books.py:       BookHandler, CRUD over the book table
    - health.py:      GET /health (ordinary FastAPI route)

Handlers stay thin: they read the request with the flow helpers, call a
repository and build the response. Choosing which handler runs is
ApplicationRouter.routing()'s job alone.
"""
