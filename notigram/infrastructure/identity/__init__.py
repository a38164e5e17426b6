"""Identity lookup adapters.

Clients:
    - IpifyClient: public IP resolution (implements IpResolver)
    - IpWhoisClient: geolocation by IP (implements GeoResolver)
"""

from notigram.infrastructure.identity.ipify_client import IpifyClient
from notigram.infrastructure.identity.ipwhois_client import IpWhoisClient
from notigram.infrastructure.identity.ipwhois_mapper import IpWhoisMapper

__all__ = [
    "IpWhoisClient",
    "IpWhoisMapper",
    "IpifyClient",
]
