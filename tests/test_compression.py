import random

import lz4.block
import pytest

from assetlib.compression import (
    DEFAULT_COMPRESSION_RATIO_THRESHOLD,
    LZ4_MAX_EXPANSION,
    CompressionMode,
    compress,
    compress_bound,
    compression_to_string,
    decode_segment,
    decompress,
    encode_segment,
    max_decoded_size,
    parse_compression_mode,
    worth_compressing,
)
from assetlib.errors import (
    E_BUFFER_SIZE,
    CorruptPayloadError,
    TruncatedInputError,
    ValidationError,
)

COMPRESSIBLE = b"\x10\x20\x30\xff" * 2048
NOISE = random.Random(1234).randbytes(4096)


def test_mode_strings():
    assert compression_to_string(CompressionMode.NONE) == "None"
    assert compression_to_string(CompressionMode.LZ4) == "LZ4"
    assert parse_compression_mode("LZ4") is CompressionMode.LZ4
    assert parse_compression_mode("None") is CompressionMode.NONE
    # lenient: unknown strings decode to NONE
    assert parse_compression_mode("zstd") is CompressionMode.NONE
    assert parse_compression_mode("") is CompressionMode.NONE


def test_compress_is_raw_lz4_block():
    packed = compress(COMPRESSIBLE)
    assert len(packed) < len(COMPRESSIBLE)
    assert len(packed) <= compress_bound(len(COMPRESSIBLE))
    assert lz4.block.decompress(packed, uncompressed_size=len(COMPRESSIBLE)) == COMPRESSIBLE
    assert decompress(packed, len(COMPRESSIBLE)) == COMPRESSIBLE


def test_compress_accepts_buffers():
    assert compress(bytearray(COMPRESSIBLE)) == compress(memoryview(COMPRESSIBLE))


def test_decompress_garbage_is_corrupt():
    with pytest.raises(CorruptPayloadError):
        decompress(b"\xff" * 32, 1024)


def test_decompress_size_mismatch_is_corrupt():
    packed = compress(COMPRESSIBLE)
    with pytest.raises(CorruptPayloadError):
        decompress(packed, len(COMPRESSIBLE) + 100)
    with pytest.raises(CorruptPayloadError):
        decompress(packed, len(COMPRESSIBLE) - 100)
    with pytest.raises(CorruptPayloadError):
        decompress(packed, 0)


def test_worth_compressing_threshold():
    assert DEFAULT_COMPRESSION_RATIO_THRESHOLD == 0.8
    assert worth_compressing(100, 80)
    assert not worth_compressing(100, 81)
    assert worth_compressing(100, 90, threshold=0.95)
    assert not worth_compressing(0, 0)


def test_encode_segment_reports_mode_used():
    data, mode = encode_segment(COMPRESSIBLE, CompressionMode.LZ4, ratio_threshold=0.8)
    assert mode is CompressionMode.LZ4
    assert len(data) < len(COMPRESSIBLE)

    data, mode = encode_segment(NOISE, CompressionMode.LZ4, ratio_threshold=0.8)
    assert mode is CompressionMode.NONE
    assert data == NOISE

    # without a threshold LZ4 output is always kept
    data, mode = encode_segment(NOISE, CompressionMode.LZ4)
    assert mode is CompressionMode.LZ4
    assert decompress(data, len(NOISE)) == NOISE

    data, mode = encode_segment(NOISE, CompressionMode.NONE)
    assert (data, mode) == (NOISE, CompressionMode.NONE)


def test_decode_segment_raw_checks_length():
    assert decode_segment(b"abcdef", 4, CompressionMode.NONE, "x") == b"abcd"
    with pytest.raises(TruncatedInputError):
        decode_segment(b"abc", 4, CompressionMode.NONE, "x")


def test_decompress_rejects_size_beyond_lz4_expansion():
    packed = compress(COMPRESSIBLE)
    with pytest.raises(CorruptPayloadError):
        decompress(packed, len(packed) * LZ4_MAX_EXPANSION + 1)
    with pytest.raises(CorruptPayloadError):
        decode_segment(b"\0" * 4, 2**46, CompressionMode.LZ4, "pixel")


def test_max_decoded_size():
    assert max_decoded_size(10, CompressionMode.NONE) == 10
    assert max_decoded_size(10, CompressionMode.LZ4) == 10 * LZ4_MAX_EXPANSION


def test_non_contiguous_source_is_validation_error():
    strided = memoryview(bytearray(range(64)))[::2]
    with pytest.raises(ValidationError) as ei:
        compress(strided)
    assert ei.value.code == E_BUFFER_SIZE
    with pytest.raises(ValidationError):
        encode_segment(strided, CompressionMode.NONE)
