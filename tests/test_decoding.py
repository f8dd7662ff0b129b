import pytest

from strinspect.decoding import DecodedSequence, decode, decode_all, recover_source_bytes
from strinspect.encodings import lookup_encoding
from strinspect.errors import SourceBytesError
from strinspect.render import format_bytes, format_glyphs
from strinspect.units import InvalidUnit, ValidUnit

UTF_8 = lookup_encoding("utf8")


def _rows(data: bytes, label: str = "utf8") -> tuple[str, str]:
    decoding = decode(data, label)
    return format_bytes(decoding), format_glyphs(decoding)


def test_ascii_printables():
    assert _rows(b"!aA1") == ("21 61 41 31 ", "!  a  A  1  ")


def test_ascii_escapables():
    assert _rows(b"\n\r\t") == ("0a 0d 09 ", "\\n \\r \\t ")


def test_ascii_non_printables():
    assert _rows(b"\x00\x7f") == ("00 7f ", "00 7f ")


def test_extra_latin_letters():
    assert _rows("éß".encode()) == ("c3 a9 c3 9f ", "e9    df    ")


def test_single_e_acute_is_one_wide_unit():
    decoding = decode(b"\xc3\xa9", UTF_8)
    assert decoding.units == (ValidUnit("é", b"\xc3\xa9"),)
    assert decoding.units[0].width() == 6


def test_overlong_utf8_code_units_are_not_decoded():
    # C0 and C1 can only start overlong forms of code points below U+0080.
    decoding = decode(b"\xc0", UTF_8)
    assert decoding.units == (InvalidUnit(0xC0),)
    assert format_bytes(decoding) == "c0 "
    assert format_glyphs(decoding) == "� "


def test_modified_utf8_null_byte_is_not_decoded_in_utf8():
    assert _rows(b"\xc0\x80") == ("c0 80 ", "� � ")


def test_cannot_escape_unicode_space_in_utf8():
    # F5..FD would start code points above U+10FFFF.
    assert _rows(b"\xf5\x80\x80\x80") == ("f5 80 80 80 ", "� � � � ")


def test_edge_of_unicode_in_utf8():
    assert _rows(b"\xf4\x8f\xbf\xbf") == ("f4 8f bf bf ", "10ffff      ")


def test_just_outside_of_unicode_in_utf8():
    assert _rows(b"\xf4\x90\x80\x80") == ("f4 90 80 80 ", "� � � � ")


def test_unexpected_continuation_bytes():
    assert _rows(b"\xc2\xa3\xa3\xa3") == ("c2 a3 a3 a3 ", "a3    � � ")


def test_truncated_sequence_yields_one_invalid_unit_per_byte():
    decoding = decode(b"ab\xe2\x82", UTF_8)
    assert decoding.units[2:] == (InvalidUnit(0xE2), InvalidUnit(0x82))


def test_surrogate_encoding_is_invalid():
    decoding = decode(b"\xed\xa0\x80", UTF_8)
    assert decoding.invalid_count == 3


@pytest.mark.parametrize(
    ("data", "label"),
    [
        (b"", "utf8"),
        (b"plain ascii", "utf8"),
        (b"\xc2\xa3\xa3\xa3\xff\xfe caf\xc3\xa9 \xf0\x9f\x98", "utf8"),
        (bytes(range(256)), "latin1"),
        (bytes(range(256)), "cp1252"),
        (bytes(range(256)), "utf8"),
        ("日本語".encode("shift_jis") + b"\xff", "shift_jis"),
        ("hi\U0001f600".encode("utf-16-le") + b"\x00", "utf-16le"),
    ],
)
def test_round_trip_is_lossless(data, label):
    decoding = decode(data, label)
    assert decoding.to_bytes() == data
    assert bytes.fromhex(format_bytes(decoding).replace(" ", "")) == data


def test_latin1_decodes_every_byte():
    decoding = decode(bytes(range(256)), "latin1")
    assert decoding.invalid_count == 0
    assert len(decoding) == 256
    assert all(unit.width() == 3 for unit in decoding)


def test_cp1252_undefined_bytes_are_invalid():
    decoding = decode(b"a\x81b", "cp1252")
    assert decoding.units == (ValidUnit("a", b"a"), InvalidUnit(0x81), ValidUnit("b", b"b"))


def test_utf16_units_span_two_bytes():
    decoding = decode("hi".encode("utf-16-le") + b"!", "utf-16le")
    assert format_bytes(decoding) == "68 00 69 00 21 "
    assert format_glyphs(decoding) == "h     i     � "


def test_shift_jis_multibyte_character():
    decoding = decode("あ".encode("shift_jis"), "sjis")
    assert decoding.units == (ValidUnit("あ", b"\x82\xa0"),)
    assert format_glyphs(decoding) == "3042  "


def test_decoding_twice_gives_equal_sequences():
    data = b"\xc3\xa9t\xc3\xa9 \xc0\x80"
    assert decode(data, "utf8") == decode(data, "utf8")


def test_to_string_uses_replacement_character():
    decoding = decode(b"A\xc0B", UTF_8)
    assert decoding.to_string() == "A�B"
    assert decoding.encoding == "utf-8"


def test_decode_all_keeps_label_order():
    utf8, latin1 = decode_all(b"\xe9", ["utf8", "latin1"])
    assert utf8.units == (InvalidUnit(0xE9),)
    assert latin1.units == (ValidUnit("é", b"\xe9"),)
    assert latin1.encoding == "iso8859-1"


class OnlyA:
    """Decodes runs of b"a" and stops on anything else."""

    name = "only-a"

    def decode_step(self, data, output):
        for offset, byte in enumerate(data):
            if byte != ord("a"):
                return offset, offset
            output.append("a")
        return len(data), None

    def encode_char(self, char):
        return char.encode("ascii")


class Unencodable(OnlyA):
    name = "unencodable"

    def encode_char(self, char):
        raise UnicodeEncodeError(self.name, char, 0, 1, "cannot encode")


def test_decode_accepts_any_encoding_capability():
    decoding = decode(b"aaXa", OnlyA())
    assert decoding == DecodedSequence(
        units=(
            ValidUnit("a", b"a"),
            ValidUnit("a", b"a"),
            InvalidUnit(ord("X")),
            ValidUnit("a", b"a"),
        ),
        encoding="only-a",
    )


def test_unrepresentable_character_is_fatal():
    with pytest.raises(SourceBytesError):
        recover_source_bytes("a", Unencodable())
    with pytest.raises(SourceBytesError):
        decode(b"a", Unencodable())


def test_many_invalid_bytes_round_trip():
    data = b"\xff" * 200_000
    decoding = decode(data, UTF_8)
    assert decoding.invalid_count == len(data)
    assert decoding.to_bytes() == data


class Recording(OnlyA):
    name = "recording"

    def __init__(self):
        self.seen = []

    def decode_step(self, data, output):
        self.seen.append(type(data))
        return super().decode_step(data, output)


def test_decoder_hands_out_views_not_copies():
    encoding = Recording()
    decode(b"aXaYa", encoding)
    assert encoding.seen == [memoryview, memoryview, memoryview]
