import threading

from vehicle_evolver.database.fitness_cache import FitnessCache
from vehicle_evolver.vehicles.genome import CellKind, Genome


def test_reinsert_is_last_writer_wins():
    cache = FitnessCache()
    g = Genome.filled(CellKind.STRUCTURAL)

    assert cache.insert(g, 500) is False
    assert cache.insert(g, 700) is True
    assert cache.get(g) == 700
    assert len(cache) == 1


def test_structurally_identical_genomes_share_an_entry(genome_factory):
    cache = FitnessCache()
    cache.insert(genome_factory(77), 10)

    twin = Genome(genome_factory(77).cells.copy())

    assert twin in cache
    assert cache.get(twin) == 10
    assert cache.get(genome_factory(78)) is None


def test_best_entry(genome_factory):
    cache = FitnessCache()
    assert cache.best() is None

    cache.insert(genome_factory(1), 50)
    cache.insert(genome_factory(2), 90)
    cache.insert(genome_factory(3), 90)
    cache.insert(genome_factory(4), -5)

    assert cache.best() == (genome_factory(2), 90)


def test_snapshot_is_a_copy(genome_factory):
    cache = FitnessCache()
    cache.insert(genome_factory(1), 1)

    snap = cache.snapshot()
    cache.insert(genome_factory(2), 2)

    assert snap == {genome_factory(1): 1}
    assert len(cache) == 2


def test_concurrent_writers(genome_factory):
    cache = FitnessCache()
    duplicates: list[bool] = []
    lock = threading.Lock()

    def writer(offset: int):
        for i in range(200):
            replaced = cache.insert(genome_factory(offset * 1000 + i), i)
            # every writer also hits a shared genome
            shared = cache.insert(genome_factory(999_999), offset)
            with lock:
                duplicates.append(replaced)
                duplicates.append(shared)

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(cache) == 8 * 200 + 1
    # the shared genome was new exactly once
    assert duplicates.count(False) == 8 * 200 + 1
    assert cache.get(genome_factory(999_999)) in range(8)
