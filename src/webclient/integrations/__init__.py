# Register error types from the HTTP library requests are sent with.
from webclient.integrations import httpx
