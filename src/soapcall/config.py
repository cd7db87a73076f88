"""
Client configuration.
"""

import ssl
from typing import Optional

from pydantic import BaseModel, ConfigDict

from soapcall.auth import BasicAuth


class Config(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    basic_auth: Optional[BasicAuth] = None
    tls: Optional[ssl.SSLContext] = None
    # 0 keeps the transport default.
    max_idle_conns_per_host: int = 0
