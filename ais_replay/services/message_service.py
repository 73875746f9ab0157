from socket import socket, getaddrinfo, gaierror, AF_INET, SOCK_DGRAM
import logging
from typing import Tuple

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 10110


def resolve_destination(host: str, port: int) -> Tuple[str, int]:
    """
    Resolve host and port to an IPv4 socket address.

    Raises:
        ValueError: If the port is out of range or the host cannot be resolved
    """
    if not isinstance(port, int) or not 0 < port < 65536:
        raise ValueError(f"Invalid port: {port}. Must be between 1 and 65535")
    try:
        infos = getaddrinfo(host, port, AF_INET, SOCK_DGRAM)
    except (gaierror, UnicodeError) as e:
        raise ValueError(f"Invalid destination host: {host!r}") from e
    return infos[0][4]


class MessageService:
    """Sends NMEA 0183 sentences as UDP datagrams"""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT):
        """
        Initialize the NMEA message service.

        Args:
            host: The IP address or host name to send to. Defaults to
                "127.0.0.1" (localhost). For sending to other devices on
                the network, use their IP address.

            port: The port number to use. Defaults to 10110, the standard
                port for NMEA 0183 over UDP. The port must match the
                receiving application's configuration (e.g., OpenCPN).

        Raises:
            ValueError: If the destination is invalid. Nothing is sent in
                that case.

        Note:
            The UDP socket is connectionless, so no connection needs to be established.
            Messages will be sent regardless of whether anything is listening on the target
            host:port combination.
        """
        self.host = host
        self.port = port
        self.address = resolve_destination(host, port)
        self.sock = socket(AF_INET, SOCK_DGRAM)
        logging.info(f"Initialized NMEA message service for {host}:{port} over UDP")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def send_nmea(self, sentence: str):
        """
        Send one sentence, terminated with CRLF, as a single datagram.

        Raises:
            OSError: If the datagram cannot be sent
        """
        data = f"{sentence}\r\n".encode("ascii")
        try:
            self.sock.sendto(data, self.address)
        except OSError as e:
            logging.error(f"Error sending NMEA message to {self.host}:{self.port}: {e}")
            raise
        logging.debug(f"Send NMEA 0183: '{sentence}'")

    def close(self):
        """Close the socket"""
        self.sock.close()
