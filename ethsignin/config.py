import os
from dotenv import load_dotenv

load_dotenv()

DEFAULT_PORT = 3000

# --- Server ---
try:
    PORT = int(os.getenv("PORT", str(DEFAULT_PORT)))
except ValueError:
    print(f"Warning: Invalid PORT in environment. Defaulting to {DEFAULT_PORT}.")
    PORT = DEFAULT_PORT

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Comma-separated list of origins allowed to call the API from a browser
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

# Directory containing the built sign-in UI (served at "/" when present)
UI_BUILD_DIR = os.getenv("UI_BUILD_DIR")

# --- Ethereum RPC (only used for ENS reverse resolution) ---
INFURA_SECRET = os.getenv("INFURA_SECRET")
ETH_RPC_URL = os.getenv("ETH_RPC_URL")
if not ETH_RPC_URL and INFURA_SECRET:
    ETH_RPC_URL = f"https://mainnet.infura.io/v3/{INFURA_SECRET}"

if not ETH_RPC_URL:
    print("Warning: INFURA_SECRET / ETH_RPC_URL not set. ENS names will not be resolved.")
if UI_BUILD_DIR and not os.path.isdir(UI_BUILD_DIR):
    print(f"Warning: UI_BUILD_DIR '{UI_BUILD_DIR}' does not exist. UI will not be served.")
