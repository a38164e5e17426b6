"""Field keys understood by the built-in message formatter.

Field selections are plain strings so callers can pass any list; keys not
listed here are ignored by the formatter.
"""

from enum import Enum


class MessageField(str, Enum):
    """Recognized field-selection keys."""

    IP = "ip"
    LOCATION = "location"
    DEVICE = "device"
    BROWSER = "browser"
    OS = "os"
    PAGE = "page"
    TIME = "time"
    TIMEZONE = "timezone"
    COUNTRY = "country"
    COUNTRY_CODE = "country_code"
    CITY = "city"
    REGION = "region"
    REGION_CODE = "region_code"
    ISP = "isp"
    CONTINENT = "continent"
    CONTINENT_CODE = "continent_code"
    FLAG = "flag"
    COORDINATES = "coordinates"
    POSTAL = "postal"
    CALLING_CODE = "calling_code"
    ASN = "asn"
    ORG = "org"
