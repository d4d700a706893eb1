"""API middleware package.

Manifesto:
    Request correlation, timing, and the catch-all error envelope live in
    middleware so the models router only translates HTTP to adapter calls.

Tags:
    modelreg, api, middleware, cross-cutting

Doc-Types:
    api-reference
"""
