# menucraft/catalog/__init__.py
