# Routes package init
"""
Bahía Escondida Cashless — API Routes Package
===============================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - root.py:           GET  /                       (service info)
                         GET  /api/ping               (MongoDB liveness)
    - huespedes.py:      GET/POST /api/huespedes, GET/PUT/DELETE /api/huespedes/{id}
    - transacciones.py:  GET/POST /api/transacciones, GET /api/transacciones/huesped/{id}
    - productos.py:      GET/POST /api/productos

Routes stay thin: extract path/query/body, call one service method, return
its result. Errors propagate as application exceptions to main.py's handlers.
"""
