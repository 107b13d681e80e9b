"""companies/ -- Tenant domain for CompanyHub: companies, stocks, price types, roles, members, invitations.

Layer rule: companies/ imports only stdlib, third-party libraries and core/.
It does NOT import from api/, web/ or auth/. User identities are plain integer
ids here; api/ joins them with auth.store when a response needs a username.
"""
