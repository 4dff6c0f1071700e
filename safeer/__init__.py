"""
Safeer Perfumes storefront backend.

Packages:
- cart: session cart store, order composer, session registry
- services: money, price normalization, Supabase repositories, catalog, checkout
- assistant: chat-completion store assistant
- middleware: crawler pre-rendering gate
- routers: FastAPI routes mounted under /api
"""
