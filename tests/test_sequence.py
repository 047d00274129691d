from seedforge import Factory, SequenceCounter
from tests.mocks import MockModel


class TestSequenceCounter:

    def test_starts_at_one_and_increments(self):
        counter = SequenceCounter()
        assert [counter.next() for _ in range(3)] == [1, 2, 3]

    def test_current_reports_last_issued(self):
        counter = SequenceCounter()
        assert counter.current == 0
        counter.next()
        counter.next()
        assert counter.current == 2


class TestFactorySequence:

    def test_root_factory_counts_from_one(self):
        factory = Factory(MockModel)
        assert [factory.next_sequence() for _ in range(3)] == [1, 2, 3]

    def test_separate_roots_have_separate_counters(self):
        first = Factory(MockModel)
        second = Factory(MockModel)
        first.next_sequence()
        first.next_sequence()
        assert second.next_sequence() == 1

    def test_child_continues_root_sequence(self):
        root = Factory(MockModel)
        child = Factory(MockModel).extend(root)

        assert root.next_sequence() == 1
        assert child.next_sequence() == 2
        assert root.next_sequence() == 3

    def test_siblings_share_one_counter(self):
        root = Factory(MockModel)
        left = Factory(MockModel).extend(root)
        right = Factory(MockModel).extend(root)

        assert left.next_sequence() == 1
        assert right.next_sequence() == 2
        assert left.sequence is right.sequence is root.sequence

    def test_parent_extended_after_child_still_shares_root_counter(self):
        grand = Factory(MockModel)
        parent = Factory(MockModel)
        child = Factory(MockModel).extend(parent)
        parent.extend(grand)

        assert [
            grand.next_sequence(),
            child.next_sequence(),
            grand.next_sequence(),
        ] == [1, 2, 3]
        assert child.sequence is grand.sequence

    def test_registered_lineage_defined_child_first(self, registry):
        registry.define("parent", MockModel)
        child = registry.define("child", MockModel).extend("parent")
        grand = registry.define("grand", MockModel)
        registry.get("parent").extend("grand")

        numbers = {grand.next_sequence(), child.next_sequence()}
        numbers.add(registry.get("parent").next_sequence())
        assert numbers == {1, 2, 3}

    def test_grandchild_uses_root_counter(self):
        root = Factory(MockModel)
        middle = Factory(MockModel).extend(root)
        leaf = Factory(MockModel).extend(middle)

        leaf.next_sequence()
        assert root.sequence.current == 1
        assert middle.next_sequence() == 2

    def test_own_counter_is_ignored_once_parented(self):
        root = Factory(MockModel)
        child = Factory(MockModel)
        child.next_sequence()
        child.next_sequence()

        child.parent = root
        assert child.next_sequence() == 1

    def test_clearing_parent_restores_own_counter(self):
        root = Factory(MockModel)
        child = Factory(MockModel)
        child.next_sequence()

        child.parent = root
        child.next_sequence()
        child.parent = None
        assert child.next_sequence() == 2
