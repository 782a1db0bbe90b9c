# Services package init
"""
Blog API — Services Layer
===========================

Service Inventory:
    - PostResource (post_resource.py): the BlogApi handler core and its
      write policy gate
    - PostStore (post_store.py): abstract persistence seam, plus NullPostStore
    - InMemoryPostStore (memory_store.py): process-local store
    - SqlAlchemyPostStore (sql_store.py): async SQLAlchemy store
    - KeyedLock (locking.py): per-id write serialization used by the stores
"""
