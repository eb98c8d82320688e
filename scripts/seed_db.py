from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.tobacco_workforce.tobacco_workforce.database.bootstrap import ensure_demo_accounts
from src.tobacco_workforce.tobacco_workforce.payroll.rates import JsonPayRateStore, PayRateTable
from src.tobacco_workforce.tobacco_workforce.core.constants import PAY_RATES_FILENAME


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_accounts(db_config)

    rates_path = Path(getattr(settings, "DATA_DIR", REPO_ROOT / "data")) / PAY_RATES_FILENAME
    if not rates_path.exists():
        JsonPayRateStore(rates_path).save(PayRateTable.defaults())

    print(
        "OK: Seeded demo accounts -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}; "
        f"pay rates at {rates_path}"
    )


if __name__ == "__main__":
    main()
