"""
Booking gateway package.

A FastAPI facade over Supabase that exposes booking CRUD endpoints and
proxies signup/login/logout calls to Supabase Auth. Storage and identity
are reached through small protocols so tests and local runs can swap in
in-memory backends.
"""
