from main import WorkspaceRegistry


def post(client, url, **payload):
    return client.post(url, json=payload)


def state(client):
    return client.get("/api/state").get_json()


def finish(client, limit=500):
    """Step by hand until the active run completes."""
    for _ in range(limit):
        data = post(client, "/api/run/step").get_json()
        if data["state"] == "completed":
            return data
    raise AssertionError("run did not finish")


def test_index_renders(client):
    response = client.get("/")
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert 'id="algo-select"' in body
    assert "<svg" in body


def test_default_state(client):
    data = state(client)
    assert data["state"] == "idle"
    assert data["algorithm"] == "bubble-sort"
    assert len(data["dataset"]) == 8
    assert data["step"] is None
    assert "<svg" in data["svg"]


def test_each_session_gets_its_own_stepper(app):
    first, second = app.test_client(), app.test_client()
    post(first, "/api/dataset/import", text="3, 2, 1")
    assert state(first)["dataset"] == [3, 2, 1]
    assert state(second)["dataset"] != [3, 2, 1]


# ---------------------------------------------------------------------------
# Dataset
# ---------------------------------------------------------------------------
def test_generate(client):
    response = post(client, "/api/dataset/generate", size=5)
    assert response.status_code == 200
    assert len(response.get_json()["dataset"]) == 5


def test_generate_rejects_out_of_bounds_size(client):
    response = post(client, "/api/dataset/generate", size=50)
    assert response.status_code == 400
    assert "between 2 and 20" in response.get_json()["error"]


def test_import(client):
    response = post(client, "/api/dataset/import", text="38, 27, 43, 3")
    assert response.status_code == 200
    assert response.get_json()["dataset"] == [38, 27, 43, 3]


def test_import_reports_the_bad_token(client):
    before = state(client)["dataset"]
    response = post(client, "/api/dataset/import", text="3, a, 5")
    assert response.status_code == 400
    assert response.get_json() == {"error": "Invalid number: 'a'", "token": "a"}
    assert state(client)["dataset"] == before


def test_import_too_many_values(client):
    text = ", ".join(str(i) for i in range(25))
    assert post(client, "/api/dataset/import", text=text).status_code == 400


# ---------------------------------------------------------------------------
# Playback
# ---------------------------------------------------------------------------
def test_start_applies_the_first_step(client):
    data = post(client, "/api/run/start").get_json()
    assert data["state"] == "running"
    assert data["step"]["step_number"] == 0
    assert data["counters"]["steps"] == 1


def test_pause_resume_stop(client):
    post(client, "/api/run/start")
    assert post(client, "/api/run/pause").get_json()["state"] == "paused"
    assert post(client, "/api/run/resume").get_json()["state"] == "running"
    data = post(client, "/api/run/stop").get_json()
    assert data["state"] == "idle"
    assert data["snapshot"] == data["dataset"]


def test_illegal_action_is_a_conflict(client):
    response = post(client, "/api/run/pause")
    assert response.status_code == 409
    assert response.get_json() == {"error": "Cannot pause() while idle", "action": "pause", "state": "idle"}


def test_unknown_action(client):
    assert post(client, "/api/run/explode").status_code == 404


def test_stepping_by_hand_to_completion(client):
    post(client, "/api/dataset/import", text="2, 1")
    for _ in range(20):
        data = post(client, "/api/run/step").get_json()
        if data["state"] == "completed":
            break
    assert data["state"] == "completed"
    assert data["snapshot"] == [1, 2]
    assert data["step"]["is_final"]
    assert post(client, "/api/run/step").status_code == 409


def test_tick_keeps_a_running_stepper_running(client):
    post(client, "/api/run/start")
    data = post(client, "/api/tick").get_json()
    assert data["state"] == "running"
    assert data["counters"]["steps"] >= 1


def test_speed(client):
    response = post(client, "/api/config/speed", speed=500)
    assert response.get_json() == {"speed": 100, "delay_ms": 50}
    assert post(client, "/api/config/speed", speed="fast").status_code == 400


def test_learning_mode_toggle(client):
    assert post(client, "/api/config/learning", enabled=False).get_json() == {"learning_mode": False}


# ---------------------------------------------------------------------------
# Algorithm selection
# ---------------------------------------------------------------------------
def test_switch_algorithm(client):
    data = post(client, "/api/config/algo", algo_key="quick-sort").get_json()
    assert data["algorithm"] == "quick-sort"
    assert "complexity" in data
    assert "source" in data


def test_switch_to_unknown_algorithm(client):
    assert post(client, "/api/config/algo", algo_key="bogo-sort").status_code == 404


def test_switch_while_running_stops_the_run(client):
    post(client, "/api/run/start")
    data = post(client, "/api/config/algo", algo_key="merge-sort").get_json()
    assert data["state"] == "idle"
    assert data["step"] is None


def test_binary_search_gets_a_sorted_dataset_and_target(client):
    data = post(client, "/api/config/algo", algo_key="binary-search").get_json()
    assert data["dataset"] == sorted(data["dataset"])
    assert data["target"] in data["dataset"]

    data = post(client, "/api/dataset/import", text="9, 4, 7").get_json()
    assert data["dataset"] == [4, 7, 9]


def test_search_target(client):
    post(client, "/api/config/algo", algo_key="linear-search")
    post(client, "/api/dataset/import", text="4, 9, 1")
    data = post(client, "/api/config/target", target="9").get_json()
    assert data["target"] == 9

    for _ in range(10):
        data = post(client, "/api/run/step").get_json()
        if data["state"] == "completed":
            break
    assert data["step"]["kind"] == "match"
    assert data["step"]["indices"] == [1]


def test_bad_target(client):
    response = post(client, "/api/config/target", target="nine")
    assert response.status_code == 400
    assert response.get_json()["token"] == "nine"


# ---------------------------------------------------------------------------
# Static content and comparison
# ---------------------------------------------------------------------------
def test_list_algorithms(client):
    data = client.get("/api/algorithms").get_json()
    assert [a["key"] for a in data] == [
        "bubble-sort", "selection-sort", "insertion-sort", "merge-sort",
        "quick-sort", "linear-search", "binary-search", "dijkstra",
        "bellman-ford", "floyd-warshall", "prim-mst", "fractional-knapsack",
    ]


def test_source_listing(client):
    data = client.get("/api/algorithms/merge-sort/source?lang=python").get_json()
    assert data["language"] == "python"
    assert data["code"]
    assert client.get("/api/algorithms/bogo-sort/source").status_code == 404
    assert client.get("/api/algorithms/merge-sort/source?lang=cobol").status_code == 400


def test_compare(client):
    post(client, "/api/dataset/import", text="8, 7, 6, 5, 4, 3, 2, 1")
    data = post(client, "/api/compare", left="bubble-sort", right="merge-sort").get_json()
    assert data["left"]["comparisons"] == 28
    assert data["right"]["comparisons"] == 12
    assert data["winner_comparisons"] == "Merge Sort"
    assert "html" in data


def test_compare_unknown_algorithm(client):
    assert post(client, "/api/compare", left="bubble-sort", right="nope").status_code == 404


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------
def test_preferences_flow(client):
    assert client.get("/api/preferences").get_json() == {"user": None}
    assert post(client, "/api/preferences", theme="dark").get_json()["user"] is None

    user = post(client, "/api/login", name="Ada").get_json()["user"]
    assert user["preferences"]["theme"] == "light"

    data = post(client, "/api/preferences", theme="dark", preferredLanguage="java").get_json()
    assert data["user"]["preferences"]["theme"] == "dark"
    assert data["user"]["preferences"]["preferredLanguage"] == "java"

    post(client, "/api/config/algo", algo_key="quick-sort")
    recent = client.get("/api/preferences").get_json()["user"]["preferences"]["recentStructures"]
    assert recent == ["quick-sort"]

    assert client.delete("/api/preferences").get_json()["user"] is None
    assert client.get("/api/preferences").get_json() == {"user": None}


def test_login_requires_a_name(client):
    assert post(client, "/api/login", name="  ").status_code == 400


def test_preferences_reject_unknown_language(client):
    post(client, "/api/login", name="Ada")
    response = post(client, "/api/preferences", preferredLanguage="cobol")
    assert response.status_code == 400
    assert response.get_json()["token"] == "cobol"


def test_preferences_reject_empty_body(client):
    assert client.post("/api/preferences", json={}).status_code == 400


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------
def test_list_structures(client):
    data = client.get("/api/structures").get_json()
    assert [s["key"] for s in data] == [
        "stack", "queue", "circular-queue", "linked-list", "doubly-linked-list",
        "bst", "avl-tree", "min-heap", "max-heap",
    ]
    assert [op["name"] for op in data[0]["operations"]] == ["push", "pop", "peek"]


def test_select_structure(client):
    data = post(client, "/api/structure/select", structure="min-heap").get_json()
    assert data["mode"] == "structure"
    assert data["structure"]["structure"] == "min-heap"
    assert 'data-op="extract"' in data["dataset_panel"]
    assert data["source"]
    assert post(client, "/api/structure/select", structure="deque").status_code == 404


def test_push_then_finish_by_hand(client):
    post(client, "/api/structure/select", structure="stack")
    post(client, "/api/structure/load", text="1, 2")
    data = post(client, "/api/structure/op", op="push", value="5").get_json()
    assert data["state"] == "running"
    assert data["step"]["kind"] == "set-pointer"

    post(client, "/api/run/pause")
    data = finish(client)
    assert data["step"]["kind"] == "push"
    assert data["structure"]["values"] == [1, 2, 5]


def test_start_replays_the_last_operation(client):
    post(client, "/api/structure/select", structure="queue")
    post(client, "/api/structure/load", text="7")
    post(client, "/api/structure/op", op="enqueue", value=8)
    post(client, "/api/run/pause")
    finish(client)

    data = finish(client)
    assert data["structure"]["values"] == [7, 8, 8]


def test_stack_overflow_is_a_bad_request(client):
    post(client, "/api/structure/select", structure="stack")
    post(client, "/api/structure/capacity", capacity=2)
    post(client, "/api/structure/load", text="1, 2")
    response = post(client, "/api/structure/op", op="push", value=3)
    assert response.status_code == 400
    assert "Stack Overflow" in response.get_json()["error"]
    assert state(client)["structure"]["values"] == [1, 2]


def test_structure_op_needs_a_value(client):
    post(client, "/api/structure/select", structure="bst")
    response = post(client, "/api/structure/op", op="insert", value="ten")
    assert response.status_code == 400
    assert response.get_json() == {"error": "Invalid value: 'ten'", "token": "ten"}


def test_unknown_structure_operation(client):
    post(client, "/api/structure/select", structure="stack")
    response = post(client, "/api/structure/op", op="shove")
    assert response.status_code == 400
    assert response.get_json()["token"] == "shove"


def test_positional_list_operation(client):
    post(client, "/api/structure/select", structure="doubly-linked-list")
    post(client, "/api/structure/load", text="1, 2, 3")
    post(client, "/api/structure/op", op="insert-at", value=9, position="1")
    post(client, "/api/run/pause")
    assert finish(client)["structure"]["values"] == [1, 9, 2, 3]

    response = post(client, "/api/structure/op", op="delete-at", position=8)
    assert response.status_code == 400
    assert response.get_json()["error"] == "Position out of bounds"


def test_load_and_reset(client):
    post(client, "/api/structure/select", structure="bst")
    data = post(client, "/api/structure/load", text="50, 30, 70, 30").get_json()
    assert data["structure"]["values"] == [50, 30, 70]
    assert post(client, "/api/structure/load", text="5, x").status_code == 400
    data = post(client, "/api/structure/reset").get_json()
    assert data["structure"]["values"] == []
    assert data["structure"]["count"] == 0


def test_circular_queue_capacity(client):
    post(client, "/api/structure/select", structure="circular-queue")
    data = post(client, "/api/structure/capacity", capacity=3).get_json()
    assert data["structure"]["values"] == [None, None, None]
    assert post(client, "/api/structure/capacity", capacity=11).status_code == 400

    post(client, "/api/structure/load", text="4, 5, 6")
    response = post(client, "/api/structure/capacity", capacity=2)
    assert response.status_code == 400
    assert state(client)["structure"]["capacity"] == 3


def test_growing_a_wrapped_circular_queue(client):
    post(client, "/api/structure/select", structure="circular-queue")
    post(client, "/api/structure/capacity", capacity=3)
    post(client, "/api/structure/load", text="1, 2, 3")
    for op, value in (("dequeue", None), ("enqueue", 4)):
        post(client, "/api/structure/op", op=op, value=value)
        post(client, "/api/run/pause")
        finish(client)
    assert state(client)["structure"]["values"] == [4, 2, 3]

    response = post(client, "/api/structure/capacity", capacity=5)
    assert response.status_code == 200
    structure = response.get_json()["structure"]
    assert structure["values"] == [2, 3, 4, None, None]
    assert (structure["front"], structure["rear"]) == (0, 2)


def test_choosing_an_algorithm_leaves_structure_mode(client):
    post(client, "/api/structure/select", structure="stack")
    data = post(client, "/api/config/algo", algo_key="bubble-sort").get_json()
    assert data["mode"] == "algorithm"
    assert "<rect" in data["svg"]


def test_structure_source_listing(client):
    data = client.get("/api/algorithms/stack/source?lang=python").get_json()
    assert data["key"] == "stack"
    assert data["code"]


# ---------------------------------------------------------------------------
# Graph & knapsack inputs
# ---------------------------------------------------------------------------
def test_graph_algorithm_runs_on_the_sample_graph(client):
    data = post(client, "/api/config/algo", algo_key="dijkstra").get_json()
    assert data["dataset"] == []
    assert 'id="source-select"' in data["dataset_panel"]
    data = finish(client)
    assert data["step"]["snapshot"] == [0, 3, 2, 8, 10, 13]


def test_graph_algorithms_take_no_number_list(client):
    post(client, "/api/config/algo", algo_key="prim-mst")
    response = post(client, "/api/dataset/import", text="3, 1, 2")
    assert response.status_code == 400
    assert "does not take a list of numbers" in response.get_json()["error"]


def test_graph_import_and_source(client):
    post(client, "/api/config/algo", algo_key="dijkstra")
    data = post(client, "/api/graph/import", text="A-B:2, B-C:3").get_json()
    assert "A-B:2, B-C:3" in data["dataset_panel"]

    post(client, "/api/graph/source", source="C")
    assert finish(client)["step"]["snapshot"] == [5, 3, 0]

    response = post(client, "/api/graph/source", source="Z")
    assert response.status_code == 400
    assert response.get_json()["token"] == "Z"


def test_graph_import_reports_the_bad_token(client):
    response = post(client, "/api/graph/import", text="A-B:2, B-C")
    assert response.status_code == 400
    assert response.get_json()["token"] == "B-C"


def test_graph_generate(client):
    post(client, "/api/config/algo", algo_key="floyd-warshall")
    data = post(client, "/api/graph/generate", size=4, seed=7).get_json()
    assert 'id="source-select"' not in data["dataset_panel"]
    assert data["svg"].count('class="node ') >= 4
    assert post(client, "/api/graph/generate", size=40).status_code == 400


def test_knapsack_import(client):
    post(client, "/api/config/algo", algo_key="fractional-knapsack")
    data = post(client, "/api/knapsack/import", items="A:60/10, B:100/20", capacity="25").get_json()
    assert "A:60/10, B:100/20" in data["dataset_panel"]
    data = finish(client)
    assert data["step"]["totals"]["value"] == 135
    assert post(client, "/api/knapsack/import", items="A:60", capacity=5).status_code == 400


def test_compare_graph_algorithms(client):
    data = post(client, "/api/compare", left="dijkstra", right="bellman-ford").get_json()
    assert data["left"]["family"] == "graph"
    assert data["left"]["size"] == 6
    assert data["right"]["outcome"] == "complete"


def test_compare_across_families_is_refused(client):
    response = post(client, "/api/compare", left="bubble-sort", right="dijkstra")
    assert response.status_code == 400
    assert response.get_json()["error"] == "Cannot compare Bubble Sort with Dijkstra's Algorithm"


def test_a_non_object_body_is_a_bad_request(client):
    response = client.post("/api/dataset/import", json=[1, 2])
    assert response.status_code == 400


# ---------------------------------------------------------------------------
# Workspaces
# ---------------------------------------------------------------------------
class Workspace:
    def __init__(self):
        self.touched = 0.0
        self.closed = False

    def close(self):
        self.closed = True


def test_each_client_gets_one_workspace(app):
    for client in (app.test_client(), app.test_client()):
        state(client)
        state(client)
    assert len(app.extensions["workspaces"]) == 2


def test_idle_workspaces_expire(clock):
    registry = WorkspaceRegistry(idle_seconds=10, max_entries=5, clock=clock)
    first = registry.get("a", Workspace)
    clock.advance(5_000)
    registry.get("b", Workspace)
    clock.advance(6_000)
    registry.get("b", Workspace)
    assert first.closed
    assert "a" not in registry
    assert "b" in registry


def test_a_full_registry_evicts_the_least_recently_used(clock):
    registry = WorkspaceRegistry(idle_seconds=1000, max_entries=2, clock=clock)
    a = registry.get("a", Workspace)
    b = registry.get("b", Workspace)
    assert registry.get("a", Workspace) is a
    registry.get("c", Workspace)
    assert b.closed and not a.closed
    assert "b" not in registry
    assert len(registry) == 2


def test_close_all(clock):
    registry = WorkspaceRegistry(clock=clock)
    ws = registry.get("a", Workspace)
    registry.close_all()
    assert ws.closed
    assert len(registry) == 0
