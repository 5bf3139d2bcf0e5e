from flappy_bird.collision import bird_box, detect_collision, first_hit, hits_pipe, out_of_bounds
from flappy_bird.entities import Pipe


def test_bird_box_shrinks_by_margin() -> None:
    assert bird_box(300) == (185, 215, 290, 310)
    # vertical position is truncated
    assert bird_box(300.9) == (185, 215, 290, 310)


def test_exact_gap_edges_do_not_collide() -> None:
    pipe = Pipe(160, 290)
    assert hits_pipe(300, pipe, 200) is False
    pipe = Pipe(160, 110)  # bottom edge at 310
    assert hits_pipe(300, pipe, 200) is False


def test_gap_edges_one_unit_inside_collide() -> None:
    assert hits_pipe(300, Pipe(160, 291), 200) is True
    assert hits_pipe(300, Pipe(160, 109), 200) is True


def test_boundary_classification_is_stable() -> None:
    pipe = Pipe(160, 290)
    results = {hits_pipe(300, pipe, 200) for _ in range(10)}
    assert results == {False}


def test_no_hit_without_horizontal_overlap() -> None:
    # pipe_left = 215 equals bird right edge
    assert hits_pipe(300, Pipe(210, 500), 200) is False
    assert hits_pipe(300, Pipe(209, 500), 200) is True
    # pipe_right = 185 equals bird left edge
    assert hits_pipe(300, Pipe(110, 500), 200) is False
    assert hits_pipe(300, Pipe(111, 500), 200) is True


def test_hard_mode_gap_is_narrower() -> None:
    pipe = Pipe(160, 200)  # bottom edge 400 normally, 350 in hard mode
    assert first_hit(345, [pipe], hard_mode=False) is None
    assert first_hit(345, [pipe], hard_mode=True) is pipe


def test_world_bounds() -> None:
    assert out_of_bounds(535) is False
    assert out_of_bounds(535.5) is True
    assert out_of_bounds(15) is False
    assert out_of_bounds(14.9) is True


def test_first_hit_respects_sequence_order() -> None:
    a = Pipe(150, 500)
    b = Pipe(160, 500)
    assert first_hit(300, [a, b], False) is a


def test_detect_collision_combines_pipes_and_bounds() -> None:
    far = [Pipe(800, 100)]
    assert detect_collision(300, far, False) is False
    assert detect_collision(560, far, False) is True
    assert detect_collision(300, [Pipe(160, 400)], False) is True
