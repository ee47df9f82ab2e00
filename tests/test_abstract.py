"""Tests for abstract polytopes: construction, duality, products and validity."""

import pytest

from polytope_core import config
from polytope_core.abstract import AbstractPolytope
from polytope_core.elements import ElementList
from polytope_core.products import ProductKind


def counts(polytope):
    return list(polytope.element_counts())


def is_valid(polytope):
    return polytope.has_min_max_elements() and polytope.check_incidences() and polytope.is_dyadic()


def hemicube():
    """The projective quotient of the cube: K4 with its three 4-cycles as faces."""
    return AbstractPolytope.from_subs([
        [[]],
        [[0], [0], [0], [0]],
        [[0, 1], [0, 2], [0, 3], [1, 2], [1, 3], [2, 3]],
        [[0, 3, 5, 2], [0, 4, 5, 1], [1, 3, 4, 2]],
        [[0, 1, 2]],
    ])


# Base shapes

def test_base_shape_ranks():
    assert AbstractPolytope.nullitope().rank == -1
    assert AbstractPolytope.point().rank == 0
    assert AbstractPolytope.dyad().rank == 1
    assert AbstractPolytope.polygon(5).rank == 2


@pytest.mark.parametrize("n", range(2, 9))
def test_polygon_counts(n):
    polygon = AbstractPolytope.polygon(n)
    assert counts(polygon) == [1, n, n, 1]
    assert is_valid(polygon)


def test_polygon_rejects_too_few_sides():
    with pytest.raises(ValueError):
        AbstractPolytope.polygon(1)


def test_max_element_covers_every_facet():
    square = AbstractPolytope.polygon(4)
    assert square.max_element.subs == [0, 1, 2, 3]
    assert square.min_element.subs == []


# Incremental construction

def test_push_builds_a_dyad():
    polytope = AbstractPolytope()
    polytope.push_min()
    polytope.push_vertices(2)
    polytope.push_max()
    assert polytope == AbstractPolytope.dyad()


def test_push_min_on_non_empty_polytope_raises():
    with pytest.raises(ValueError):
        AbstractPolytope.point().push_min()


def test_push_vertices_requires_rank_minus_one():
    with pytest.raises(ValueError):
        AbstractPolytope.dyad().push_vertices(3)


def test_relaxed_construction_only_warns(monkeypatch, caplog):
    monkeypatch.setattr(config, "STRICT_CONSTRUCTION", False)
    polytope = AbstractPolytope.point()
    polytope.push_min()
    assert polytope.rank == 1
    assert "Precondition violated" in caplog.text


# Duality

@pytest.mark.parametrize("polytope, expected", [
    (AbstractPolytope.nullitope(), [1]),
    (AbstractPolytope.point(), [1, 1]),
    (AbstractPolytope.dyad(), [1, 2, 1]),
    (AbstractPolytope.polygon(6), [1, 6, 6, 1]),
    (AbstractPolytope.hypercube(3), [1, 6, 12, 8, 1]),
    (AbstractPolytope.simplex(3), [1, 4, 6, 4, 1]),
])
def test_dual_reverses_counts(polytope, expected):
    dual = polytope.dual()
    assert counts(dual) == expected
    assert is_valid(dual)


def test_dual_is_an_involution_on_incidences():
    cube = AbstractPolytope.hypercube(3)
    double = cube.dual().dual()

    assert counts(double) == counts(cube)
    for r in range(-1, cube.rank + 1):
        original = sorted(sorted(el.subs) for el in cube[r])
        assert sorted(sorted(el.subs) for el in double[r]) == original


def test_dual_does_not_touch_the_original():
    square = AbstractPolytope.polygon(4)
    before = square.to_subs()
    square.dual()
    assert square.to_subs() == before


def test_dual_mut_of_cube_is_an_octahedron():
    polytope = AbstractPolytope.hypercube(3)
    polytope.dual_mut()
    assert counts(polytope) == counts(AbstractPolytope.orthoplex(3))


# Regular families and products

@pytest.mark.parametrize("rank, expected", [
    (-1, [1]),
    (0, [1, 1]),
    (1, [1, 2, 1]),
    (2, [1, 3, 3, 1]),
    (3, [1, 4, 6, 4, 1]),
    (4, [1, 5, 10, 10, 5, 1]),
])
def test_simplex_counts(rank, expected):
    simplex = AbstractPolytope.simplex(rank)
    assert simplex.rank == rank
    assert counts(simplex) == expected
    assert is_valid(simplex)


@pytest.mark.parametrize("rank, expected", [
    (-1, [1]),
    (0, [1, 1]),
    (1, [1, 2, 1]),
    (2, [1, 4, 4, 1]),
    (3, [1, 8, 12, 6, 1]),
    (4, [1, 16, 32, 24, 8, 1]),
])
def test_hypercube_counts(rank, expected):
    hypercube = AbstractPolytope.hypercube(rank)
    assert hypercube.rank == rank
    assert counts(hypercube) == expected
    assert is_valid(hypercube)


@pytest.mark.parametrize("rank, expected", [
    (-1, [1]),
    (0, [1, 1]),
    (1, [1, 2, 1]),
    (2, [1, 4, 4, 1]),
    (3, [1, 6, 12, 8, 1]),
    (4, [1, 8, 24, 32, 16, 1]),
])
def test_orthoplex_counts(rank, expected):
    orthoplex = AbstractPolytope.orthoplex(rank)
    assert orthoplex.rank == rank
    assert counts(orthoplex) == expected
    assert is_valid(orthoplex)


def test_duoprism_of_triangle_and_square():
    duoprism = AbstractPolytope.duoprism(AbstractPolytope.polygon(3), AbstractPolytope.polygon(4))
    assert counts(duoprism) == [1, 12, 24, 19, 7, 1]
    assert is_valid(duoprism)


def test_duopyramid_of_dyads_is_a_tetrahedron():
    duopyramid = AbstractPolytope.duopyramid(AbstractPolytope.dyad(), AbstractPolytope.dyad())
    assert counts(duopyramid) == [1, 4, 6, 4, 1]
    assert is_valid(duopyramid)


def test_duotegum_is_dual_to_duoprism():
    p, q = AbstractPolytope.polygon(3), AbstractPolytope.polygon(5)
    duotegum = AbstractPolytope.duotegum(p, q)
    assert counts(duotegum) == counts(AbstractPolytope.duoprism(p, q))[::-1]
    assert is_valid(duotegum)


def test_duocomb_of_polygons():
    duocomb = AbstractPolytope.duocomb(AbstractPolytope.polygon(3), AbstractPolytope.polygon(4))
    assert counts(duocomb) == [1, 12, 24, 12, 1]
    assert is_valid(duocomb)


def test_duocomb_with_a_point_is_the_other_factor():
    square = AbstractPolytope.polygon(4)
    assert AbstractPolytope.duocomb(AbstractPolytope.point(), square) == square
    assert AbstractPolytope.duocomb(square, AbstractPolytope.point()) == square


def test_product_element_order_for_a_square():
    square = AbstractPolytope.duoprism(AbstractPolytope.dyad(), AbstractPolytope.dyad())
    assert square.to_subs() == [
        [[]],
        [[0], [0], [0], [0]],
        [[0, 1], [2, 3], [0, 2], [1, 3]],
        [[0, 1, 2, 3]],
    ]


@pytest.mark.parametrize("kind, identity", [
    (ProductKind.PYRAMID, [1]),
    (ProductKind.PRISM, [1, 1]),
    (ProductKind.TEGUM, [1, 1]),
    (ProductKind.COMB, [1, 1]),
])
def test_multiproduct_of_nothing_is_the_identity(kind, identity):
    assert counts(AbstractPolytope.multiproduct(kind, [])) == identity


def test_multiproduct_of_one_factor_is_a_copy():
    square = AbstractPolytope.polygon(4)
    product = AbstractPolytope.multiprism([square])
    assert product == square
    assert product is not square
    product[0].append(product[0][0].copy())
    assert square.vertex_count() == 4


def test_pyramid_prism_tegum_of_square():
    square = AbstractPolytope.polygon(4)
    assert counts(square.pyramid()) == [1, 5, 8, 5, 1]
    assert counts(square.prism()) == [1, 8, 12, 6, 1]
    assert counts(square.tegum()) == [1, 6, 12, 8, 1]


# Ditopes, hosotopes and antiprisms

def test_ditope_of_square():
    ditope = AbstractPolytope.polygon(4).ditope()
    assert counts(ditope) == [1, 4, 4, 2, 1]
    assert is_valid(ditope)


def test_hosotope_of_square():
    hosotope = AbstractPolytope.polygon(4).hosotope()
    assert counts(hosotope) == [1, 2, 4, 4, 1]
    assert is_valid(hosotope)


def test_hosotope_is_dual_of_ditope_of_dual():
    square = AbstractPolytope.polygon(4)
    expected = square.dual().ditope().dual()
    assert counts(square.hosotope()) == counts(expected)


def test_ditope_mut_changes_in_place():
    polytope = AbstractPolytope.dyad()
    polytope.ditope_mut()
    assert counts(polytope) == [1, 2, 2, 1]


def test_antiprism_of_triangle_is_an_octahedron():
    antiprism = AbstractPolytope.polygon(3).antiprism()
    assert counts(antiprism) == [1, 6, 12, 8, 1]
    assert is_valid(antiprism)


def test_antiprism_of_square():
    antiprism = AbstractPolytope.polygon(4).antiprism()
    assert counts(antiprism) == [1, 8, 16, 10, 1]
    assert is_valid(antiprism)


@pytest.mark.parametrize("polytope, expected", [
    (AbstractPolytope.nullitope(), [1, 1]),
    (AbstractPolytope.point(), [1, 2, 1]),
    (AbstractPolytope.dyad(), [1, 4, 4, 1]),
])
def test_antiprism_of_low_ranks(polytope, expected):
    assert counts(polytope.antiprism()) == expected


# Elements and sections

def test_get_element_vertices():
    cube = AbstractPolytope.hypercube(3)
    assert cube.get_element_vertices(3, 0) == list(range(8))
    assert len(cube.get_element_vertices(2, 0)) == 4
    assert cube.get_element_vertices(0, 5) == [5]
    assert cube.get_element_vertices(-1, 0) is None
    assert cube.get_element_vertices(2, 6) is None


def test_get_element_of_cube():
    cube = AbstractPolytope.hypercube(3)
    face = cube.get_element(2, 0)
    assert counts(face) == [1, 4, 4, 1]
    assert is_valid(face)
    assert counts(cube.get_element(3, 0)) == counts(cube)
    assert cube.get_element(5, 0) is None
    assert counts(cube.get_element(-1, 0)) == [1]


def test_vertex_figure_section_of_cube():
    vertex_figure = AbstractPolytope.hypercube(3).section(0, 0, 3, 0)
    assert counts(vertex_figure) == [1, 3, 3, 1]
    assert is_valid(vertex_figure)


def test_section_of_non_incident_elements_raises():
    square = AbstractPolytope.polygon(4)
    # Edge 0 joins vertices 1 and 2.
    assert 0 not in square[1][0].subs
    with pytest.raises(ValueError):
        square.section(0, 0, 1, 0)


def test_superelements_of_square():
    supers = AbstractPolytope.polygon(4).superelements()
    assert supers[-1] == [[0, 1, 2, 3]]
    assert all(len(s) == 2 for s in supers[0])
    assert supers[2] == [[]]


# Validity checks

def test_has_min_max_elements():
    assert AbstractPolytope.polygon(3).has_min_max_elements()
    assert not AbstractPolytope([ElementList.min(), ElementList.vertices(2)]).has_min_max_elements()


def test_check_incidences_catches_bad_indices():
    broken = AbstractPolytope.from_subs([[[]], [[0], [0]], [[0, 5]], [[0]]])
    assert not broken.check_incidences()
    assert AbstractPolytope.hypercube(3).check_incidences()


def test_is_dyadic_catches_an_edge_with_three_vertices():
    broken = AbstractPolytope.from_subs([
        [[]],
        [[0], [0], [0]],
        [[0, 1, 2], [1, 2], [2, 0]],
        [[0, 1, 2]],
    ])
    assert not broken.is_dyadic()


@pytest.mark.parametrize("polytope", [
    AbstractPolytope.hypercube(3),
    AbstractPolytope.simplex(4),
    AbstractPolytope.duoprism(AbstractPolytope.polygon(3), AbstractPolytope.polygon(3)),
    AbstractPolytope.polygon(5).antiprism(),
])
def test_products_and_duals_stay_valid(polytope):
    assert is_valid(polytope)
    assert is_valid(polytope.dual())


def test_connectivity():
    assert AbstractPolytope.hypercube(3).is_connected()
    assert AbstractPolytope.hypercube(3).is_strongly_connected()
    assert AbstractPolytope.hypercube(3).full_check()

    two_squares = AbstractPolytope.from_subs([
        [[]],
        [[0]] * 8,
        [[0, 1], [1, 2], [2, 3], [3, 0], [4, 5], [5, 6], [6, 7], [7, 4]],
        [list(range(8))],
    ])
    assert not two_squares.is_connected()
    assert not two_squares.full_check()


def test_low_ranks_are_connected():
    assert AbstractPolytope.dyad().is_connected()
    assert AbstractPolytope.point().is_strongly_connected()


# Flags and orientability

def test_flag_counts():
    assert len(AbstractPolytope.polygon(5).flags()) == 10
    assert len(AbstractPolytope.hypercube(3).flags()) == 48


def test_adjacent_flag_changes_one_element():
    cube = AbstractPolytope.hypercube(3)
    flag = cube.flags()[0]
    for j in range(3):
        neighbor = cube.adjacent_flag(flag, j)
        assert neighbor[j] != flag[j]
        assert neighbor[:j] + neighbor[j + 1:] == flag[:j] + flag[j + 1:]
        assert cube.adjacent_flag(neighbor, j) == flag


def test_orientability():
    assert AbstractPolytope.polygon(7).is_orientable()
    assert AbstractPolytope.hypercube(3).is_orientable()
    assert AbstractPolytope.simplex(4).is_orientable()
    assert not hemicube().is_orientable()


def test_hemicube_is_a_valid_polytope():
    assert counts(hemicube()) == [1, 4, 6, 3, 1]
    assert is_valid(hemicube())
    assert hemicube().is_connected()


def test_orientability_requires_diamond_property():
    broken = AbstractPolytope.from_subs([
        [[]],
        [[0], [0], [0]],
        [[0, 1, 2], [1, 2], [2, 0]],
        [[0, 1, 2]],
    ])
    with pytest.raises(ValueError):
        broken.is_orientable()
