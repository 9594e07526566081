from app.utils.survey_token import decode_survey_token, encode_survey_token


def test_token_is_url_safe_and_unpadded():
    token = encode_survey_token("4f1c-seminar", "9a2b-reservation")
    assert "=" not in token
    assert "+" not in token and "/" not in token
    assert decode_survey_token(token) == ("4f1c-seminar", "9a2b-reservation")


def test_garbage_decodes_to_none():
    assert decode_survey_token("") is None
    assert decode_survey_token("!!!") is None
    assert decode_survey_token(encode_survey_token("only-one", "")) is None
