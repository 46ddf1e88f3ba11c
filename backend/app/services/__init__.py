# Services package init
"""
Bahía Escondida Cashless — Services Layer
===========================================

What:  Business logic between routes (HTTP) and the storage adapter.

Service Inventory:
    - HuespedService:     guests (list active, get, create, update, soft delete)
    - TransaccionService: transactions (list, list by guest, create)
    - ProductoService:    product catalog (list by category, create)
    - SeedService:        default catalog on an empty `productos` collection
    - common:             id parsing, timestamps, storage error mapping

Each operation performs exactly one storage call and converts driver errors
into DatabaseError; nothing here knows about HTTP status codes.
"""
