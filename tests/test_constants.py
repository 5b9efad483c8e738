from bson import ObjectId

from app.models.constants import map_mongo_id, map_to_mongo_id, with_both_ids


def test_map_mongo_id_renames_identity():
    doc = {"_id": "S1-CS101-3", "studentId": "S1", "semester": 3}

    assert map_mongo_id(doc) == {"id": "S1-CS101-3", "studentId": "S1", "semester": 3}
    assert "_id" in doc


def test_object_id_becomes_hex_string():
    oid = ObjectId()

    assert map_mongo_id({"_id": oid, "name": "x"}) == {"id": str(oid), "name": "x"}


def test_inverse_laws():
    doc = {"_id": "S1-CS101-3", "studentId": "S1", "semester": 3, "score": 85}
    record = {"id": "U7", "fullName": "Asha", "year": 2}

    assert map_to_mongo_id(map_mongo_id(doc)) == doc
    assert map_mongo_id(map_to_mongo_id(record)) == record


def test_with_both_ids():
    record = with_both_ids({"_id": "k", "a": 1})

    assert record == {"a": 1, "id": "k", "_id": "k"}


def test_map_to_mongo_id_does_not_mutate_input():
    record = {"id": "S1-CS101-3", "studentId": "S1"}

    assert map_to_mongo_id(record) == {"studentId": "S1", "_id": "S1-CS101-3"}
    assert record == {"id": "S1-CS101-3", "studentId": "S1"}
