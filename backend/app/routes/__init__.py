# Routes package init
"""
Inkwell Backend — API Routes Package
======================================

What:  HTTP route handlers; together they form the route table.

Route Inventory:
    - users.py:     /users, /users/{id}, /users/{id}/articles
    - articles.py:  /articles, /articles/{id}
    - health.py:    GET /health

Routes stay thin: extract path/query/body, call the service, choose the
success status. Requests that match a path but not a method never reach
a handler; main.py answers them with 405.
"""
