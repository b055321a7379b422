from worker.app.services.escapes import decode_escapes, raw_offset

BS = "\\"


def esc(kind: str, digits: str) -> str:
    return BS + kind + digits


def test_decode_unicode_escape():
    assert decode_escapes(esc("u", "0041")) == "A"


def test_decode_byte_escape():
    assert decode_escapes(esc("x", "41")) == "A"
    assert decode_escapes("caf" + esc("x", "e9")) == "caf\xe9"


def test_short_or_non_hex_escapes_untouched():
    for text in (esc("u", "004"), esc("u", "004g"), esc("x", "4"), esc("x", "zz")):
        assert decode_escapes(text) == text


def test_disabled_returns_text_unchanged():
    text = esc("u", "0041") + esc("x", "41")
    assert decode_escapes(text, enabled=False) == text


def test_mixed_case_hex_and_surrounding_text():
    raw = '{"k": "' + esc("u", "4F60") + esc("u", "597d") + '!"}'
    assert decode_escapes(raw) == '{"k": "你好!"}'


def test_byte_pass_runs_after_unicode_pass():
    # the first pass yields a backslash, which then forms a \x escape
    assert decode_escapes(esc("u", "005c") + "x41") == "A"


def test_surrogate_halves_decoded_independently():
    out = decode_escapes(esc("u", "d83d") + esc("u", "de00"))
    assert out == chr(0xD83D) + chr(0xDE00)
    assert len(out) == 2


def test_escaped_backslash_is_not_special():
    # JSON's \\u0041 is still matched on the second backslash
    assert decode_escapes(BS + esc("u", "0041")) == BS + "A"


def test_empty_input():
    assert decode_escapes("") == ""


def test_raw_offset_maps_back_past_escapes():
    raw = "a" + esc("u", "0041") + "b" + esc("x", "41") + "c"
    # decoded: "aAbAc"
    assert decode_escapes(raw) == "aAbAc"
    assert [raw_offset(raw, i) for i in range(6)] == [0, 1, 7, 8, 12, 13]


def test_raw_offset_two_pass_escape():
    raw = esc("u", "005c") + "x41!"
    assert decode_escapes(raw) == "A!"
    assert raw_offset(raw, 0) == 0
    assert raw_offset(raw, 1) == 9
