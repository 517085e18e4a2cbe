from natid_engine.recognizers import get_belgian_recognizers


def _recognizers(nn):
    national_number, vat = get_belgian_recognizers(nn)
    return national_number, vat


def test_valid_national_number_gets_full_score(nn):
    recognizer, _ = _recognizers(nn)
    text = "Rijksregisternummer: 93.04.01-001.96"

    results = recognizer.analyze(text, entities=["NATIONAL_ID"])

    assert len(results) == 1
    assert results[0].entity_type == "NATIONAL_ID"
    assert results[0].score == 1.0
    assert text[results[0].start:results[0].end] == "93.04.01-001.96"


def test_unformatted_national_number(nn):
    recognizer, _ = _recognizers(nn)
    results = recognizer.analyze("NN 93040100196 on file", entities=["NATIONAL_ID"])
    assert [r.score for r in results] == [1.0]


def test_invalid_national_number_is_dropped(nn):
    recognizer, _ = _recognizers(nn)
    assert recognizer.analyze("Number 93.04.01-001.95", entities=["NATIONAL_ID"]) == []


def test_vat_number(nn):
    _, recognizer = _recognizers(nn)
    text = "BTW BE 0403.019.261 / BE 0403.019.262"

    results = recognizer.analyze(text, entities=["VAT_ID"])

    assert len(results) == 1
    assert text[results[0].start:results[0].end] == "BE 0403.019.261"


def test_validate_result_uses_validator(nn):
    recognizer, _ = _recognizers(nn)
    assert recognizer.validate_result("93.04.01-001.96") is True
    assert recognizer.validate_result("93.04.01-001.95") is False
