# Routes package init
"""
Blog API — API Routes Package
===============================

Route Inventory:
    - posts.py:   GET/PUT/POST/DELETE /posts...  (the post resource)
    - health.py:  GET /health                    (service health check)

Routes stay thin: decode the request, await one PostResource operation,
return its value. Policy and error mapping live in the resource.
"""
