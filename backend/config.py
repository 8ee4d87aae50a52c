# backend/config.py
from __future__ import annotations
from pathlib import Path
import os
from dotenv import load_dotenv

# Load exactly backend/.env (do NOT call load_dotenv() without a path)
ENV_FILE = Path(__file__).with_name(".env")
load_dotenv(ENV_FILE, override=False)


def get_data_dir() -> Path:
    # Fallback to backend/data when DATA_DIR is not set
    return Path(os.getenv("DATA_DIR", str(Path(__file__).with_name("data")))).resolve()


# Runtime override helper (handy in tests)
def set_data_dir(path: str | Path) -> Path:
    p = Path(path).resolve()
    os.environ["DATA_DIR"] = str(p)
    return p


def get_settings():
    return Settings


class Settings:
    GEOCODING_GATEWAY: str = os.getenv("GEOCODING_GATEWAY", "viacep")
    VIACEP_BASE_URL: str = os.getenv("VIACEP_BASE_URL", "https://viacep.com.br/ws")
    IBGE_BASE_URL: str = os.getenv(
        "IBGE_BASE_URL", "https://servicodados.ibge.gov.br/api/v1/localidades"
    )
    HTTP_TIMEOUT_S: float = float(os.getenv("HTTP_TIMEOUT_S", "10.0"))
    POSTAL_CODE_CACHE_TTL_S: int = int(os.getenv("POSTAL_CODE_CACHE_TTL_S", "3600"))
    HOME_COUNTRY: str = os.getenv("HOME_COUNTRY", "Brasil")
    EMISSION_FACTORS_PRESET: str = os.getenv("EMISSION_FACTORS_PRESET", "builtin")
    EMISSION_FACTORS_CSV: str = os.getenv(
        "EMISSION_FACTORS_CSV",
        str(Path(__file__).resolve().parent / "data" / "emission_factors.csv"),
    )


settings = Settings
