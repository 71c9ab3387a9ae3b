"""
Contracts (data models).

This folder defines the shapes exchanged with the catalog and cart services
and handed to the view layer:
- Product / RawCartLine as returned by the backend
- CartEntry as displayed in the cart sidebar
- SessionAuth as produced by the login flow

Both mock and real HTTP clients return these contracts, never raw dicts.
"""
