# Services package init
"""
Jotter Backend: Services Layer
===============================

Service Inventory:
    - NoteStore: the notes table and its create/list/get/delete operations,
      plus the get_store dependency that hands it to the routes
"""
