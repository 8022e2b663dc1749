"""
Tests for ``route:list``, ``config:list`` and ``config:get`` — source
scanning of the app's routes and config maps.
"""

import textwrap
from pathlib import Path

import pytest

from magic_cli.core.errors import NotFoundError, UsageError
from magic_cli.core.services.config_ops import get_config, list_config
from magic_cli.core.services.route_ops import Route, list_routes, parse_routes
from magic_cli.core.services.source_scan import find_closing_brace, quoted_strings
from magic_cli.ui.cli.tables import render_table

ROUTES = textwrap.dedent("""\
    import 'package:magic/magic.dart';

    void registerAppRoutes() {
      MagicRoute.page('/', () => const WelcomeView());

      MagicRoute.page('/profile', () => const ProfileView()).middleware(['auth']);

      MagicRoute.group(prefix: '/admin', middleware: ['auth', 'admin'], routes: () {
        MagicRoute.page('/users', () => const UsersView());
        MagicRoute.page('/', () => const DashboardView());
      });
    }
""")

APP_CONFIG = textwrap.dedent("""\
    import 'package:magic/magic.dart';

    /// Application configuration.
    Map<String, dynamic> get appConfig => {
      'app': {
        'name': env('APP_NAME', 'My App'),
        'env': env('APP_ENV', 'production'),
        'debug': false,
        'timeout': 30,
        'locale': 'en',
      },
    };
""")

NETWORK_CONFIG = textwrap.dedent("""\
    final Map<String, dynamic> networkConfig = {
      'network': {
        'default': 'api',
        'drivers': {
          'api': {
            'base_url': env('API_URL'),
          },
        },
      },
    };
""")


@pytest.fixture
def routed_project(flutter_project: Path) -> Path:
    routes = flutter_project / "lib/routes"
    routes.mkdir(parents=True)
    (routes / "app.dart").write_text(ROUTES)
    (routes / "auth.dart").write_text("void registerAuthRoutes() {\n  MagicRoute.page('/login', () => const LoginView());\n}\n")
    return flutter_project


@pytest.fixture
def configured_project(flutter_project: Path) -> Path:
    config = flutter_project / "lib/config"
    config.mkdir(parents=True)
    (config / "app.dart").write_text(APP_CONFIG)
    (config / "network.dart").write_text(NETWORK_CONFIG)
    (flutter_project / ".env").write_text('APP_NAME="Shop"\n')
    return flutter_project


# ═══════════════════════════════════════════════════════════════════
#  Scanning helpers
# ═══════════════════════════════════════════════════════════════════


class TestSourceScan:
    def test_find_closing_brace(self):
        text = "{ a { b } c } d"
        assert find_closing_brace(text, 1) == 12

    def test_unbalanced(self):
        assert find_closing_brace("{ a {", 1) == 5

    def test_quoted_strings(self):
        assert quoted_strings("'auth', 'admin'") == ["auth", "admin"]
        assert quoted_strings(None) == []


# ═══════════════════════════════════════════════════════════════════
#  Routes
# ═══════════════════════════════════════════════════════════════════


class TestParseRoutes:
    def test_routes_in_source_order(self):
        routes = parse_routes(ROUTES, "app.dart")
        assert [r.full_path for r in routes] == ["/", "/profile", "/admin/users", "/admin"]

    def test_inline_middleware(self):
        routes = {r.full_path: r for r in parse_routes(ROUTES)}
        assert routes["/profile"].middleware == ["auth"]
        assert routes["/"].middleware == []

    def test_group_prefix_and_middleware(self):
        routes = {r.full_path: r for r in parse_routes(ROUTES)}
        assert routes["/admin/users"].prefix == "/admin"
        assert routes["/admin/users"].middleware == ["auth", "admin"]
        assert routes["/admin"].middleware == ["auth", "admin"]

    def test_nested_groups_innermost_wins(self):
        source = textwrap.dedent("""\
            MagicRoute.group(prefix: '/a', routes: () {
              MagicRoute.group(prefix: '/a/b', middleware: ['inner'], routes: () {
                MagicRoute.page('/c', () => const C());
              });
              MagicRoute.page('/d', () => const D());
            });
        """)
        routes = {r.full_path: r for r in parse_routes(source)}
        assert set(routes) == {"/a/b/c", "/a/d"}
        assert routes["/a/b/c"].middleware == ["inner"]
        assert routes["/a/d"].middleware == []

    def test_route_to_dict(self):
        route = Route(path="/users", prefix="/admin/", middleware=["auth"], source_file="app.dart")
        assert route.to_dict() == {
            "method": "GET",
            "path": "/admin/users",
            "middleware": ["auth"],
            "file": "app.dart",
        }


class TestListRoutes:
    def test_sorted_across_files(self, routed_project: Path):
        outcome = list_routes(routed_project)
        assert outcome["files"] == 2
        assert [r.full_path for r in outcome["routes"]] == [
            "/",
            "/admin",
            "/admin/users",
            "/login",
            "/profile",
        ]

    def test_missing_directory(self, flutter_project: Path):
        with pytest.raises(NotFoundError, match="Routes directory not found"):
            list_routes(flutter_project)


class TestRouteListCommand:
    def test_table(self, magic, routed_project: Path, capsys):
        assert magic(["route:list"]) == 0
        out = capsys.readouterr().out
        assert "/admin/users" in out
        assert "auth, admin" in out
        assert "Showing 5 route(s) from 2 file(s)" in out
        assert "auth.dart" not in out

    def test_verbose_shows_file(self, magic, routed_project: Path, capsys):
        assert magic(["route:list", "-v"]) == 0
        assert "auth.dart" in capsys.readouterr().out

    def test_no_routes_directory(self, magic, flutter_project: Path, capsys):
        assert magic(["route:list"]) == 1
        assert "Routes directory not found: lib/routes/" in capsys.readouterr().err

    def test_empty_directory(self, magic, flutter_project: Path, capsys):
        (flutter_project / "lib/routes").mkdir(parents=True)
        assert magic(["route:list"]) == 0
        assert "No routes found" in capsys.readouterr().out

    def test_after_install(self, magic, flutter_project: Path, capsys):
        assert magic(["install"]) == 0
        capsys.readouterr()
        assert magic(["route:list"]) == 0
        assert "| GET " in capsys.readouterr().out


# ═══════════════════════════════════════════════════════════════════
#  Config
# ═══════════════════════════════════════════════════════════════════


class TestGetConfig:
    def test_env_value_wins(self, configured_project: Path):
        value = get_config(configured_project, "app.name")
        assert value.value == "Shop"
        assert value.source == ".env (APP_NAME)"

    def test_env_default(self, configured_project: Path):
        value = get_config(configured_project, "app.env")
        assert value.value == "production"
        assert value.source == "lib/config/app.dart (default)"

    @pytest.mark.parametrize(
        "key, expected",
        [("app.locale", "en"), ("app.timeout", "30"), ("app.debug", "false"), ("network.default", "api")],
    )
    def test_literals(self, configured_project: Path, key, expected):
        value = get_config(configured_project, key)
        assert value.value == expected
        assert value.source.startswith("lib/config/")

    def test_unset_env_without_default(self, configured_project: Path):
        with pytest.raises(NotFoundError, match="reads API_URL, which is not set"):
            get_config(configured_project, "network.drivers.api.base_url")

    def test_unknown_key(self, configured_project: Path):
        with pytest.raises(NotFoundError, match='Config key "app.missing" not found.'):
            get_config(configured_project, "app.missing")

    def test_empty_key(self, configured_project: Path):
        with pytest.raises(UsageError):
            get_config(configured_project, ".")

    def test_no_config_directory(self, flutter_project: Path):
        with pytest.raises(NotFoundError, match="Config directory not found"):
            get_config(flutter_project, "app.name")


class TestListConfig:
    def test_sections_and_env(self, configured_project: Path):
        outcome = list_config(configured_project)
        keys = {(s.file, s.config_name, s.key) for s in outcome["sections"]}
        assert keys == {("app", "appConfig", "app"), ("network", "networkConfig", "network")}
        assert outcome["files"] == 2
        assert outcome["env"] == {"APP_NAME": "Shop"}

    def test_nested_key_count(self, configured_project: Path):
        sections = {s.key: s for s in list_config(configured_project)["sections"]}
        assert sections["app"].nested_keys == 5


class TestConfigCommands:
    def test_get(self, magic, configured_project: Path, capsys):
        assert magic(["config:get", "app.name"]) == 0
        assert capsys.readouterr().out.strip() == "Shop"

    def test_get_with_source(self, magic, configured_project: Path, capsys):
        assert magic(["config:get", "app.env", "--show-source"]) == 0
        assert "production (from lib/config/app.dart (default))" in capsys.readouterr().out

    def test_get_missing_key_argument(self, magic, configured_project: Path, capsys):
        assert magic(["config:get"]) == 1
        assert 'missing: "key"' in capsys.readouterr().err

    def test_get_unknown(self, magic, configured_project: Path, capsys):
        assert magic(["config:get", "nope.key"]) == 1
        assert 'Config key "nope.key" not found.' in capsys.readouterr().err

    def test_list(self, magic, configured_project: Path, capsys):
        assert magic(["config:list", "--source"]) == 0
        out = capsys.readouterr().out
        assert "| network" in out
        assert "APP_NAME" in out
        assert "Found 2 config section(s) in 2 file(s)" in out

    def test_get_after_install(self, magic, flutter_project: Path, capsys):
        assert magic(["install"]) == 0
        capsys.readouterr()
        assert magic(["config:get", "app.name"]) == 0
        assert capsys.readouterr().out.strip() == "Magic E2e Test"


class TestRenderTable:
    def test_layout(self):
        table = render_table(["A", "Long"], [["xyz", "1"]])
        assert table.splitlines() == [
            "+-----+------+",
            "| A   | Long |",
            "+-----+------+",
            "| xyz | 1    |",
            "+-----+------+",
        ]
