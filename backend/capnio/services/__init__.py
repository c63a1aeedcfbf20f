from capnio.services.asset_service import (
    create_machine,
    create_sensor,
    create_site,
    create_zone,
    delete_asset,
    get_asset,
    get_forest,
    resolve,
)
from capnio.services.control_service import (
    clear_machine_alert,
    list_machine_controls,
    raise_machine_alert,
    save_configuration,
)
from capnio.services.repository import AssetRepository, SqlAssetRepository
from capnio.services.seed_service import seed_demo_data

__all__ = [
    "AssetRepository",
    "SqlAssetRepository",
    "get_forest",
    "resolve",
    "get_asset",
    "create_site",
    "create_zone",
    "create_machine",
    "create_sensor",
    "delete_asset",
    "list_machine_controls",
    "save_configuration",
    "raise_machine_alert",
    "clear_machine_alert",
    "seed_demo_data",
]
