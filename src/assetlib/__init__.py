"""assetlib: binary asset containers for textures, meshes and environment maps."""

from .compression import (
    DEFAULT_COMPRESSION_RATIO_THRESHOLD,
    CompressionMode,
    compression_to_string,
    parse_compression_mode,
    worth_compressing,
)
from .container import (
    AssetContainer,
    container_from_bytes,
    container_to_bytes,
    load_asset_file,
    read_container,
    save_asset_file,
    write_container,
)
from .environment import (
    EnvironmentInfo,
    pack_environment,
    read_environment_info,
    unpack_environment,
)
from .errors import (
    AssetError,
    CompressionError,
    CorruptPayloadError,
    SpecError,
    TruncatedInputError,
    ValidationError,
    VersionMismatchError,
)
from .mesh import MeshInfo, VertexFormat, pack_mesh, read_mesh_info, unpack_mesh
from .texture import (
    ColorSpace,
    TextureFormat,
    TextureInfo,
    pack_texture,
    read_texture_info,
    unpack_texture,
)
from .versions import (
    IENV_VERSION,
    ITEX_VERSION,
    MESH_VERSION,
    major_version,
    minor_version,
    pack_version,
    patch_version,
    unpack_version,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_COMPRESSION_RATIO_THRESHOLD",
    "CompressionMode",
    "compression_to_string",
    "parse_compression_mode",
    "worth_compressing",
    "AssetContainer",
    "container_from_bytes",
    "container_to_bytes",
    "load_asset_file",
    "read_container",
    "save_asset_file",
    "write_container",
    "EnvironmentInfo",
    "pack_environment",
    "read_environment_info",
    "unpack_environment",
    "AssetError",
    "CompressionError",
    "CorruptPayloadError",
    "SpecError",
    "TruncatedInputError",
    "ValidationError",
    "VersionMismatchError",
    "MeshInfo",
    "VertexFormat",
    "pack_mesh",
    "read_mesh_info",
    "unpack_mesh",
    "ColorSpace",
    "TextureFormat",
    "TextureInfo",
    "pack_texture",
    "read_texture_info",
    "unpack_texture",
    "IENV_VERSION",
    "ITEX_VERSION",
    "MESH_VERSION",
    "major_version",
    "minor_version",
    "pack_version",
    "patch_version",
    "unpack_version",
]
