# Infrastructure clients
from clients.platform_client import PlatformClient, PlatformClientError
