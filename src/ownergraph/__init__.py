"""
Ownergraph - NYC ownership network intelligence

Builds a best-effort ownership signal graph around a single property:
- Crawls HPD registrations outward through named contacts
- Links shell entities that share a business mailing address
- Distills the connected component into a ranked portfolio
"""

__version__ = "0.1.0"
