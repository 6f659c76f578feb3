import pytest
from masked_name import (
    Directory,
    File,
    FileState,
    Node,
    PreconditionViolation,
    RootNode,
    StringName,
)


@pytest.fixture
def root():
    RootNode._root_node = None
    yield RootNode.get_root_node()
    RootNode._root_node = None


@pytest.fixture
def usr(root):
    return Directory("usr", root)


def test_root_is_unique(root):
    assert RootNode.get_root_node() is root
    assert root.get_parent_node() is root
    assert root.get_base_name() == ""


def test_root_full_name(root):
    name = root.get_full_name()
    assert isinstance(name, StringName)
    assert name.get_delimiter_character() == "/"
    assert name.get_no_components() == 1
    assert name.as_string() == ""


def test_full_name(usr):
    bin_dir = Directory("bin", usr)
    ls = File("ls", bin_dir)
    name = ls.get_full_name()
    assert name.get_no_components() == 4
    assert name.as_string() == "/usr/bin/ls"
    assert name.as_data_string() == ".usr.bin.ls"


def test_full_name_is_fresh(usr):
    f = File("x", usr)
    first = f.get_full_name()
    first.append("extra")
    assert f.get_full_name().as_string() == "/usr/x"


def test_base_name_with_delimiter_is_masked(usr):
    f = File("a/b", usr)
    name = f.get_full_name()
    assert name.get_no_components() == 3
    assert name.get_component(2) == r"a\/b"
    assert name.as_string() == "/usr/a/b"


def test_children_registered(usr):
    f = File("x", usr)
    assert usr.has_child_node(f)
    assert f.get_parent_node() is usr
    assert f in usr.get_child_nodes()


def test_child_nodes_is_a_copy(usr):
    File("x", usr)
    children = usr.get_child_nodes()
    children.clear()
    assert len(usr.get_child_nodes()) == 1


def test_move(root, usr):
    local = Directory("local", usr)
    f = File("x", usr)
    f.move(local)
    assert not usr.has_child_node(f)
    assert local.has_child_node(f)
    assert f.get_parent_node() is local
    assert f.get_full_name().as_string() == "/usr/local/x"


def test_move_into_own_subtree_rejected(root, usr):
    local = Directory("local", usr)
    with pytest.raises(PreconditionViolation):
        usr.move(usr)
    with pytest.raises(PreconditionViolation):
        usr.move(local)
    assert usr.get_parent_node() is root
    assert usr.get_full_name().as_string() == "/usr"


def test_move_directory_to_sibling(root, usr):
    etc = Directory("etc", root)
    usr.move(etc)
    assert etc.has_child_node(usr)
    assert usr.get_full_name().as_string() == "/etc/usr"


def test_move_into_file_rejected(usr):
    f = File("x", usr)
    d = Directory("d", usr)
    with pytest.raises(PreconditionViolation):
        d.move(f)


def test_root_starts_without_children(root):
    assert root.get_child_nodes() == set()


def test_move_rejects_none(usr):
    f = File("x", usr)
    with pytest.raises(PreconditionViolation):
        f.move(None)
    assert usr.has_child_node(f)


def test_rename(usr):
    f = File("x", usr)
    f.rename("y")
    assert f.get_base_name() == "y"
    assert f.get_full_name().as_string() == "/usr/y"
    with pytest.raises(PreconditionViolation):
        f.rename(None)


def test_root_ignores_move_and_rename(root, usr):
    root.move(usr)
    root.rename("top")
    assert root.get_parent_node() is root
    assert root.get_base_name() == ""


def test_node_preconditions(usr):
    with pytest.raises(PreconditionViolation):
        Node(None, usr)
    with pytest.raises(PreconditionViolation):
        Node("x", None)


def test_remove_child_requires_membership(usr):
    other = Directory("other", usr)
    with pytest.raises(PreconditionViolation):
        other.remove_child_node(usr)


def test_open_only_allowed_when_closed(usr):
    f = File("x", usr)
    assert f.get_file_state() == FileState.CLOSED
    f.open()
    assert f.get_file_state() == FileState.OPEN
    with pytest.raises(PreconditionViolation):
        f.open()


def test_read_only_allowed_when_open(usr):
    f = File("x", usr)
    with pytest.raises(PreconditionViolation):
        f.read(1)


def test_read_returns_bytes(usr):
    f = File("x", usr)
    f.open()
    assert f.read(4) == b"\x00\x00\x00\x00"
    assert f.read(0) == b""


def test_read_rejects_negative_bytes(usr):
    f = File("x", usr)
    f.open()
    with pytest.raises(PreconditionViolation):
        f.read(-5)
    with pytest.raises(PreconditionViolation):
        f.read(1.5)


def test_close_only_allowed_when_open(usr):
    f = File("x", usr)
    with pytest.raises(PreconditionViolation):
        f.close()
    f.open()
    f.close()
    assert f.get_file_state() == FileState.CLOSED


def test_delete(usr):
    f = File("x", usr)
    f.delete()
    assert f.get_file_state() == FileState.DELETED
    assert not usr.has_child_node(f)
    with pytest.raises(PreconditionViolation):
        f.open()


def test_delete_requires_closed(usr):
    f = File("x", usr)
    f.open()
    with pytest.raises(PreconditionViolation):
        f.delete()
    assert usr.has_child_node(f)
