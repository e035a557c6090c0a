"""
Healthcheck script for the Docker container.

This script makes a GET request to the /health endpoint and exits with a status
code of 0 if the response is successful (200 OK), and 1 otherwise.
"""
import sys
import httpx

from crypto_stats.config import SERVICE_PORT

try:
    response = httpx.get(f"http://localhost:{SERVICE_PORT}/health", timeout=3.0)

    if response.status_code == 200:
        print(f"Healthcheck passed. Symbols loaded: {len(response.json()['symbols'])}")
        sys.exit(0)
    else:
        print(f"Healthcheck failed with status code: {response.status_code}")
        sys.exit(1)

except httpx.RequestError as e:
    print(f"Healthcheck failed with error: {e}")
    sys.exit(1)
