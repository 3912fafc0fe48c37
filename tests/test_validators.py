from play2win.validators import validate_conclusion_request, validate_query


def test_validate_query_trims():
    q, w = validate_query("  left wing at 55'  ")
    assert q == "left wing at 55'"
    assert w == []


def test_validate_query_missing_and_empty_soft_fail():
    q, w = validate_query(None)
    assert q is None and w == ["query_missing"]
    q2, w2 = validate_query("   ")
    assert q2 is None and w2 == ["query_empty"]
    q3, w3 = validate_query(42)
    assert q3 is None and w3 == ["query_invalid"]


def test_validate_conclusion_request_normalizes_texts():
    q, r, m, w = validate_conclusion_request({"researcher": "  good  ", "model": ""})
    assert q is None
    assert r == "good"
    assert m is None
    assert "conclusion_inputs_missing" not in w


def test_validate_conclusion_request_flags_empty_body():
    q, r, m, w = validate_conclusion_request(None)
    assert (q, r, m) == (None, None, None)
    assert "conclusion_inputs_missing" in w
