from utils.document_id import new_document_id, is_valid_document_id


def test_generated_ids_are_valid_and_distinct():
    ids = {new_document_id() for _ in range(50)}
    assert len(ids) == 50
    assert all(is_valid_document_id(i) for i in ids)


def test_rejects_malformed_ids():
    for value in ("", "short", "a" * 21, "a" * 19 + "-", "a" * 19 + " ", "a" * 20 + "\n"):
        assert not is_valid_document_id(value)
