"""
API server package — HTTP interface of the donate action.

Serves action descriptors and unsigned transactions; delegates to the
actions package for resolution, building and encoding.
"""
