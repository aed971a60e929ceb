from slinky.lists import dereference_list, reference_list


def test_reference_list_empty():
    assert reference_list([]) == []


def test_reference_list_two_elements():
    items = ["foo", "bar"]
    got = reference_list(items)
    assert got == ["foo", "bar"]
    assert all(a is b for a, b in zip(got, items))


def test_reference_list_returns_new_list():
    items = ["foo"]
    got = reference_list(items)
    got.append("bar")
    assert items == ["foo"]


def test_reference_list_accepts_generator():
    assert reference_list(x * 2 for x in range(3)) == [0, 2, 4]


def test_dereference_list_empty():
    assert dereference_list([]) == []


def test_dereference_list_two_elements():
    assert dereference_list(["foo", "bar"]) == ["foo", "bar"]


def test_dereference_list_nil_element():
    assert dereference_list([None]) == []


def test_dereference_list_keeps_falsy_values():
    assert dereference_list([None, 0, "", None, "a"]) == [0, "", "a"]