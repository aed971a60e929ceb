import pytest

from slinky.podinfo import PodInfo, parse_pod_info


@pytest.mark.parametrize(
    "left, right, expected",
    [
        (PodInfo(), PodInfo(), True),
        (PodInfo("default", "foo"), PodInfo("default", "foo"), True),
        (PodInfo("default", "foo"), PodInfo(), False),
        (PodInfo("default", "foo"), PodInfo("default", "bar"), False),
        (PodInfo("default", "foo"), PodInfo("bar", "foo"), False),
    ],
)
def test_equal(left, right, expected):
    assert (left == right) is expected


def test_to_json_empty():
    assert PodInfo().to_json() == '{"namespace":"","podName":""}'


def test_to_json_populated():
    assert PodInfo("default", "foo").to_json() == '{"namespace":"default","podName":"foo"}'


def test_to_json_escapes_html():
    got = PodInfo("ns", "<a&b>").to_json()
    assert got == '{"namespace":"ns","podName":"\\u003ca\\u0026b\\u003e"}'


def test_str_is_json():
    assert str(PodInfo("default", "foo")) == '{"namespace":"default","podName":"foo"}'


def test_parse_empty_string():
    with pytest.raises(ValueError):
        parse_pod_info("", PodInfo())


def test_parse_none():
    with pytest.raises(ValueError):
        parse_pod_info(None)


def test_parse_empty_values():
    assert parse_pod_info('{"namespace":"","podName":""}', PodInfo()) == PodInfo()


def test_parse_overwrite():
    got = parse_pod_info('{"namespace":"default","podName":"foo"}', PodInfo("baz", "bar"))
    assert got == PodInfo("default", "foo")


def test_parse_partial_keeps_base():
    assert parse_pod_info('{"podName":"x"}', PodInfo("baz", "bar")) == PodInfo("baz", "x")


def test_parse_null_returns_base():
    assert parse_pod_info("null", PodInfo("a", "b")) == PodInfo("a", "b")


def test_parse_case_insensitive_keys():
    assert parse_pod_info('{"Namespace":"n","PODNAME":"p"}') == PodInfo("n", "p")


@pytest.mark.parametrize("text", ['{"namespace":1}', "[1]", "1"])
def test_parse_invalid(text):
    with pytest.raises(ValueError):
        parse_pod_info(text)


def test_round_trip():
    info = PodInfo("default", "<pod>")
    assert parse_pod_info(info.to_json()) == info