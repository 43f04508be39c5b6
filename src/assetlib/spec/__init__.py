from .models import AssetSpec
from .loader import load_asset_spec
from .builder import build_container

__all__ = ["AssetSpec", "load_asset_spec", "build_container"]
