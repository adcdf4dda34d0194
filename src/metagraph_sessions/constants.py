"""Constants shared across the pipeline."""

# External chains (selects the create variant and its signature scheme)
ETHEREUM = "ethereum"
SOLANA = "solana"
SUPPORTED_CHAINS = (ETHEREUM, SOLANA)

# Demo access object used when none is configured
DEFAULT_ACCESS_OBJ = "Owner1"

# Endpoint
DATA_PATH = "/data"
DEFAULT_TIMEOUT_SECONDS = 30.0

# Validator data-sign
DATA_SIGN_PREFIX = "\u0019Constellation Signed Data:\n"
UNCOMPRESSED_KEY_PREFIX = "04"
PKCS_PUBLIC_KEY_PREFIX = "3056301006072a8648ce3d020106052b8104000a034200"
DAG_ADDRESS_PREFIX = "DAG"

# Lifecycle
DEFAULT_LIFECYCLE_DELAY_SECONDS = 60.0
