from eth_utils import keccak

ATTEST_TYPE = (
    b"Attest(uint16 version,bytes32 schema,address recipient,uint64 time,"
    b"uint64 expirationTime,bool revocable,bytes32 refUID,bytes data,bytes32 salt)"
)
ATTEST_TYPEHASH: bytes = keccak(ATTEST_TYPE)

EIP712_DOMAIN_TYPE = (
    b"EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
)
EIP712_DOMAIN_TYPEHASH: bytes = keccak(EIP712_DOMAIN_TYPE)

# EIP-191 version byte 0x01: structured data
EIP191_STRUCTURED_PREFIX = b"\x19\x01"

STRUCT_FIELD_TYPES = [
    "bytes32",  # typehash
    "uint256",  # version
    "bytes32",  # schema
    "address",  # recipient
    "uint256",  # time
    "uint256",  # expirationTime
    "bool",     # revocable
    "bytes32",  # refUID
    "bytes32",  # keccak(data)
    "bytes32",  # salt
]

UINT16_MAX = 2**16 - 1
UINT64_MAX = 2**64 - 1
UINT256_MAX = 2**256 - 1
ADDRESS_LENGTH = 20
WORD_LENGTH = 32
