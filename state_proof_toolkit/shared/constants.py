"""All constants for the project"""

import os

from dotenv import load_dotenv
from eth_utils import keccak
import rlp

from state_proof_toolkit.shared.exceptions import ConfigurationException

load_dotenv()


class TrieConstants:
    """Global class constants for Merkle-Patricia trie decoding"""

    HASH_LENGTH = 32

    # Number of RLP items in each node shape
    BRANCH_NODE_ITEMS = 17
    SHORT_NODE_ITEMS = 2
    BRANCH_VALUE_INDEX = 16

    # Hex-prefix flag bits (high nibble of the first path byte)
    LEAF_FLAG = 0x2
    ODD_FLAG = 0x1
    MAX_PATH_FLAG = 0x3

    # Root of a trie with no entries: keccak(rlp(b""))
    EMPTY_TRIE_ROOT = keccak(rlp.encode(b""))
    # Code hash of an account without code: keccak(b"")
    EMPTY_CODE_HASH = keccak(b"")


class GlobalConstants:
    """Global class constants read from the environment"""

    DEFAULT_OUTPUT_DIR = "output"
    DEFAULT_LOG_LEVEL = "INFO"

    @staticmethod
    def output_dir() -> str:
        output_dir = os.getenv(
            "SPT_OUTPUT_DIR", GlobalConstants.DEFAULT_OUTPUT_DIR
        )
        if not output_dir.strip():
            raise ConfigurationException("SPT_OUTPUT_DIR must not be empty")
        return output_dir

    @staticmethod
    def log_level() -> str:
        return os.getenv(
            "SPT_LOG_LEVEL", GlobalConstants.DEFAULT_LOG_LEVEL
        ).upper()
