from chip8.opcode import Opcode, decode

import pytest


def test_fields_are_extracted() -> None:
    op = Opcode(0xD4A7)

    assert op.addr == 0x4A7
    assert op.n == 0x7
    assert op.x == 0x4
    assert op.y == 0xA
    assert op.kk == 0xA7
    assert op.hi_nibble == 0xD
    assert op.lo_byte == 0xA7


def test_decode_is_big_endian() -> None:
    assert decode(0x12, 0x34) == Opcode(0x1234)
    assert repr(decode(0x00, 0xE0)) == "Opcode(0x00E0)"


def test_every_16_bit_value_decodes() -> None:
    for word in (0x0000, 0x7FFF, 0x8000, 0xFFFF):
        assert Opcode(word).word == word


def test_out_of_range_word_is_rejected() -> None:
    with pytest.raises(ValueError):
        Opcode(0x10000)
