"""
Animal Registry: filter/paginate/CRUD HTTP service over a SQLite table of animals.
"""
__version__ = "2.0.0"
