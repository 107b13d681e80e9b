"""auth/ -- Authentication package for CompanyHub.

Layer rule: auth/ imports only stdlib, third-party libraries and core/.
It does NOT import from api/, web/, or companies/.
api/ and web/ import from auth/, not the other way around.
"""
