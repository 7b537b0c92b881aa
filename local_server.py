import logging
import sys

import psutil

import config
from lan_address import resolve_local_private_ipv4, NoPrivateAddressError
from webapp import create_app

logger = logging.getLogger(__name__)


def setup_logging():
    log_level = logging.DEBUG if config.DEBUG else logging.INFO
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=log_level
    )


# --- Main Server Logic ---
def run_server():
    """
    Resolves the LAN address, then serves the working directory until the
    process is killed. Returns 1 without binding if no LAN address is found.
    """
    setup_logging()

    try:
        local_ip = resolve_local_private_ipv4()
    except (NoPrivateAddressError, psutil.Error, OSError) as e:
        print("Error getting local IP address:", e)
        return 1

    app = create_app(local_ip)

    print("--- LAN File Browser ---")
    print(f"Local address: http://{config.LOCALHOST}")
    print(f"LAN address:   http://{local_ip}")
    print(f"Server started at http://{config.LOCALHOST} (local) and http://{local_ip} (LAN)")
    print("------------------------")

    logger.info(f"Listening on {config.BIND_HOST}:{config.PORT}")
    app.run(host=config.BIND_HOST, port=config.PORT, threaded=True)
    return 0


def main():
    sys.exit(run_server())


if __name__ == "__main__":
    main()
