import types

from instancemap.instances.models import Instance, Node, NodeAddress, nodes_from_list
from instancemap.instances.nodes import find_node_by_address


def _node(name, *addrs):
    return Node(name=name, addresses=[NodeAddress(type=t, address=a) for t, a in addrs])


def test_finds_node_by_any_address():
    n1 = _node("win-1", ("InternalIP", "10.0.0.4"), ("Hostname", "win-1"))
    n2 = _node("win-2", ("InternalIP", "10.0.0.5"), ("ExternalIP", "34.1.2.3"))
    assert find_node_by_address("34.1.2.3", [n1, n2]) is n2
    assert find_node_by_address("win-1", [n1, n2]) is n1


def test_no_match_returns_none():
    n1 = _node("win-1", ("InternalIP", "10.0.0.4"))
    assert find_node_by_address("10.0.0.40", [n1]) is None
    assert find_node_by_address("10.0.0.4", []) is None


def test_node_from_kubectl_json():
    doc = {
        "kind": "NodeList",
        "items": [
            {
                "metadata": {"name": "win-1"},
                "status": {"addresses": [
                    {"type": "InternalIP", "address": "10.0.0.4"},
                    {"type": "Hostname", "address": "win-1"},
                ]},
            },
            {"metadata": {"name": "bare"}, "status": {}},
        ],
    }
    nodes = nodes_from_list(doc)
    assert [n.name for n in nodes] == ["win-1", "bare"]
    assert nodes[0].address_values() == ["10.0.0.4", "win-1"]
    assert nodes[1].addresses == []


def test_node_from_k8s_objects():
    v1 = types.SimpleNamespace(
        metadata=types.SimpleNamespace(name="win-2"),
        status=types.SimpleNamespace(addresses=[
            types.SimpleNamespace(type="InternalIP", address="10.0.0.5"),
        ]),
    )
    no_status = types.SimpleNamespace(metadata=types.SimpleNamespace(name="new"), status=None)
    node_list = types.SimpleNamespace(items=[v1, no_status])

    nodes = nodes_from_list(node_list)
    assert nodes[0] == Node(name="win-2", addresses=[NodeAddress("InternalIP", "10.0.0.5")])
    assert nodes[1].addresses == []


def test_instance_node_name():
    n = _node("win-1", ("InternalIP", "10.0.0.4"))
    assert Instance("10.0.0.4", "core", n).node_name == "win-1"
    assert Instance("10.0.0.9", "core").node_name is None
