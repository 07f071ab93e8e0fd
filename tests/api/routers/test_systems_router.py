from sitecrawl.api.routers.systems import create_systems_router


def _get_endpoint(router, path: str, method: str):
    for route in router.routes:
        if getattr(route, "path", None) != path:
            continue
        methods = getattr(route, "methods", set())
        if method.upper() in methods:
            return route.endpoint
    raise AssertionError(f"No route found for {method} {path}")


def test_config_limits_use_container_branching_cap():
    router = create_systems_router({"SITECRAWL_MAX_CHILDREN_PER_NODE": 4, "USER_AGENT": None})
    data = _get_endpoint(router, "/systems/config", "GET")()
    assert data["limits"] == {"maxDepth": 5, "maxPages": 100, "maxChildrenPerNode": 4}
    assert data["environment"] == {"SITECRAWL_MAX_CHILDREN_PER_NODE": "4", "USER_AGENT": None}


def test_config_limits_fall_back_to_default_branching_cap():
    router = create_systems_router({})
    data = _get_endpoint(router, "/systems/config", "GET")()
    assert data["limits"]["maxChildrenPerNode"] == 2
    assert data["environment"] == {}
