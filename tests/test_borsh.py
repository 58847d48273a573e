import struct

import pytest

from bondsnipe.borsh import BorshError, BorshReader, Pubkey, b58decode, b58encode

PROGRAM_ID = "6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P"


def test_all_zero_key_is_all_ones():
    assert b58encode(bytes(32)) == "1" * 32


def test_empty_encoding():
    assert b58encode(b"") == ""
    assert b58decode("") == b""


@pytest.mark.parametrize(
    "data",
    [b"\x00", b"\x00\x00\x01", b"hello world", bytes(range(32)), b"\xff" * 40],
)
def test_b58_round_trip(data):
    assert b58decode(b58encode(data)) == data


def test_leading_zeros_preserved():
    encoded = b58encode(b"\x00\x00\x05")
    assert encoded.startswith("11")
    assert b58decode(encoded)[:2] == b"\x00\x00"


def test_b58decode_rejects_bad_character():
    with pytest.raises(ValueError):
        b58decode("0OIl")


def test_program_id_round_trip():
    key = Pubkey.from_base58(PROGRAM_ID)
    assert len(bytes(key)) == 32
    assert str(key) == PROGRAM_ID


def test_pubkey_wrong_length():
    with pytest.raises(ValueError):
        Pubkey(b"\x01" * 31)


def test_pubkey_equality_and_hash():
    a = Pubkey(bytes(range(32)))
    b = Pubkey.from_base58(str(a))
    assert a == b
    assert {a: 1}[b] == 1


def test_reader_integers():
    data = struct.pack("<BIQq", 7, 4_000_000_000, 2**64 - 1, -5)
    reader = BorshReader(data)
    assert reader.u8() == 7
    assert reader.u32() == 4_000_000_000
    assert reader.u64() == 2**64 - 1
    assert reader.i64() == -5
    assert reader.is_empty()


def test_reader_bool_values():
    reader = BorshReader(b"\x00\x01")
    assert reader.bool() is False
    assert reader.bool() is True
    assert reader.is_empty()


def test_reader_bool_invalid():
    with pytest.raises(BorshError):
        BorshReader(b"\x02").bool()


def test_reader_string_and_pubkey():
    key = Pubkey.from_base58(PROGRAM_ID)
    text = "Pump Token"
    encoded = text.encode()
    data = struct.pack("<I", len(encoded)) + encoded + bytes(key)
    reader = BorshReader(data)
    assert reader.string() == text
    assert reader.pubkey() == key
    assert reader.remaining == 0


def test_reader_string_truncated():
    data = struct.pack("<I", 10) + b"abc"
    with pytest.raises(BorshError):
        BorshReader(data).string()


def test_reader_string_invalid_utf8():
    data = struct.pack("<I", 2) + b"\xff\xfe"
    with pytest.raises(BorshError):
        BorshReader(data).string()


def test_reader_truncated_u64():
    reader = BorshReader(b"\x01\x02\x03")
    with pytest.raises(BorshError):
        reader.u64()
    assert reader.position == 0


def test_reader_not_empty_until_consumed():
    reader = BorshReader(struct.pack("<QQ", 1, 2))
    assert reader.u64() == 1
    assert not reader.is_empty()
    assert reader.u64() == 2
    assert reader.is_empty()