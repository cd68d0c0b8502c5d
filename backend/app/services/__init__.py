# Services package init
"""
Inkwell Backend — Services Layer
==================================

What:  Business logic layer sitting between routes (HTTP) and the store.
Why:   Routes handle HTTP; services own validation order, existence checks
       and the statements they send through the persistence gateway.

Service Inventory:
    - PersistenceGateway: fetch_all / fetch_one / execute over a session
    - ResourceService:    shared id parsing, pagination, counting, deletes
    - UserService:        /users rules (email syntax and uniqueness)
    - ArticleService:     /articles rules (structure, ownership)
    - validators:         field-level checks used by both services
"""
