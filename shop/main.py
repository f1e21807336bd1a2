import logging
import socket

import uvicorn

from shop.api.api_run import app
from shop.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL


def get_local_ip() -> str:
    """Address other devices on the LAN can use, or '127.0.0.1' when there is none.

    Connecting a UDP socket only selects the outgoing interface; nothing is sent.
    """
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect(("8.8.8.8", 80))
        ip = str(s.getsockname()[0])
    except OSError:
        ip = "127.0.0.1"
    finally:
        s.close()
    return ip


if __name__ == "__main__":
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    local_ip = get_local_ip()
    print(f"ShopSense running on http://localhost:{APP_PORT} (Press CTRL+C to quit)")
    if APP_HOST == "0.0.0.0" and local_ip not in ("127.0.0.1", "localhost"):
        print(f"Accessible from other devices at: http://{local_ip}:{APP_PORT}")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)
