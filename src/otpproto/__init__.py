from .cipher import encrypt, decrypt, transform
from .handshake import Role, ENCRYPT, DECRYPT
from .keygen import generate_key
from .link import CipherServer, CipherClient, resolve_address
from .session import Session
from .wire import FrameCodec
from .errors import (
    OTPError,
    InputError,
    AddressError,
    TransportError,
    ProtocolError,
    RoleMismatch,
    FrameTooLarge,
)
