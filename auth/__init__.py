"""auth/ -- Authentication and authorization package for the AUTOGIRO API.

Layer rule: auth/ imports only stdlib, third-party libraries, core/ and db/.
It does NOT import from api/ or inventory/.
api/ imports from auth/, not the other way around.
"""
