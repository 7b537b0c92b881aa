import os
import ipaddress
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Environment Settings ---
# The DEBUG flag enables more detailed logging.
DEBUG = os.environ.get('DEBUG', 'False').lower() == 'true'


# --- Server Settings ---
# The listener always binds every interface on the standard HTTP port.
# Binding port 80 needs root (or CAP_NET_BIND_SERVICE) on most systems.
BIND_HOST = "0.0.0.0"
PORT = 80
LOCALHOST = "127.0.0.1"

# SERVE_ROOT: Directory whose contents are browsable. "." is the process's
# working directory at request time.
SERVE_ROOT = "."


# --- LAN Address Detection ---
# Only the RFC-1918 blocks count as a LAN address.
PRIVATE_NETWORKS = [
    ipaddress.IPv4Network("10.0.0.0/8"),
    ipaddress.IPv4Network("172.16.0.0/12"),
    ipaddress.IPv4Network("192.168.0.0/16"),
]
