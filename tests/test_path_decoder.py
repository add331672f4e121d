import numpy as np

from fuelroute.models.domain import RouteMap, Segment
from fuelroute.services.routing.encoder import END_OF_ROUTE, PathDecoder
from fuelroute.services.routing.graph import build_branch_index


def _belo_horizonte_map() -> RouteMap:
    legs = [
        ("Belo Horizonte", "Campinas", 605.0),
        ("Belo Horizonte", "Brasilia", 735.0),
        ("Belo Horizonte", "Rio de Janeiro", 441.0),
        ("Belo Horizonte", "Vila Velha", 522.0),
        ("Belo Horizonte", "Montes Claros", 426.0),
        ("Rio de Janeiro", "Porto Seguro", 1105.0),
        ("Rio de Janeiro", "Montes Claros", 856.0),
        ("Rio de Janeiro", "Salvador", 1631.0),
        ("Montes Claros", "Salvador", 1014.0),
        ("Vila Velha", "Porto Seguro", 588.0),
        ("Vila Velha", "Salvador", 1052.0),
    ]
    segments = tuple(
        Segment(id=i, origin=origin, destination=destination, distance_km=km)
        for i, (origin, destination, km) in enumerate(legs, start=1)
    )
    return RouteMap(id=1, name="Brasil", segments=segments)


def _decoder() -> PathDecoder:
    return PathDecoder(build_branch_index(_belo_horizonte_map()))


def test_branch_index_keeps_storage_order_and_max_out_degree():
    index = build_branch_index(_belo_horizonte_map())

    assert index.branches("Belo Horizonte") == (1, 2, 3, 4, 5)
    assert index.branches("Rio de Janeiro") == (6, 7, 8)
    assert index.branches("Montes Claros") == (9,)
    assert index.branches("Salvador") == ()
    assert index.max_branch_count == 5
    assert index.has_destination("Salvador")
    assert not index.has_origin("Salvador")


def test_branch_index_of_empty_map():
    index = build_branch_index(RouteMap(id=1, name="empty"))

    assert index.max_branch_count == 0
    assert index.branches("anywhere") == ()


def test_gene_bounds_allow_end_marker_after_first_gene():
    decoder = _decoder()

    assert decoder.genome_length == 11
    assert decoder.gene_bounds(0) == (0, 4)
    assert decoder.gene_bounds(1) == (END_OF_ROUTE, 4)
    assert decoder.gene_bounds(10) == (END_OF_ROUTE, 4)


def test_decode_follows_branches_and_stops_at_end_marker():
    path = _decoder().decode("Belo Horizonte", [4, 0, -1, 3, 3, 3, 3, 3, 3, 3, 3])

    assert [segment.id for segment in path.segments] == [5, 9]
    assert path.valid_gene_count == 2
    assert path.segment_ids == (5, 9)
    assert path.final_destination == "Salvador"


def test_decode_wraps_genes_larger_than_branch_count():
    path = _decoder().decode("Belo Horizonte", [2, 4, 3])

    # 4 % 3 picks the second branch out of Rio de Janeiro, 3 % 1 the only one out of Montes Claros
    assert path.segment_ids == (3, 7, 9)


def test_decode_stops_at_dead_end():
    path = _decoder().decode("Belo Horizonte", [0, 3, 2, 1])

    assert path.segment_ids == (1,)
    assert path.valid_gene_count == 1
    assert path.final_destination == "Campinas"


def test_decode_from_point_without_branches_is_empty():
    path = _decoder().decode("Salvador", [0, 1, 2])

    assert path.is_empty
    assert path.valid_gene_count == 0
    assert path.final_destination is None


def test_decoded_paths_are_contiguous_and_start_at_origin():
    decoder = _decoder()
    rng = np.random.default_rng(11)

    for _ in range(500):
        genes = [int(rng.integers(low, high + 1)) for low, high in
                 (decoder.gene_bounds(i) for i in range(decoder.genome_length))]
        path = decoder.decode("Belo Horizonte", genes)

        assert path.segments[0].origin == "Belo Horizonte"
        for current, following in zip(path.segments, path.segments[1:]):
            assert current.destination == following.origin


def test_every_gene_in_domain_resolves_inside_branch_list():
    decoder = _decoder()
    index = decoder.index
    _, high = decoder.gene_bounds(0)

    for point, links in index.links.items():
        for gene in range(high + 1):
            assert decoder.resolve(point, gene) in links
