import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]

nox.options.sessions = ["domain", "application", "bdd", "integration"]

# Rebuilt per interpreter: a cached psycopg2 wheel may target the wrong ABI.
_NATIVE_PACKAGES = ["psycopg2"]


def _install(session: nox.Session, *extras: str) -> None:
    session.run("poetry", "install", *(f"--extras={extra}" for extra in extras), external=True)
    if "production" in extras:
        session.run("pip", "install", "--force-reinstall", "--no-cache-dir", *_NATIVE_PACKAGES)


def _pytest(session: nox.Session, *paths: str) -> None:
    session.run("pytest", *paths, *session.posargs, env={"PROTEAN_ENV": "test"})


@nox.session(python=PYTHON_VERSIONS)
def domain(session: nox.Session) -> None:
    """Aggregates, value objects and the checkout splitter."""
    _install(session, "test")
    _pytest(session, "tests/marketplace/domain/")


@nox.session(python=PYTHON_VERSIONS)
def application(session: nox.Session) -> None:
    """Command handlers and event handlers through ``domain.process``."""
    _install(session, "test")
    _pytest(session, "tests/marketplace/application/")


@nox.session(python=PYTHON_VERSIONS)
def bdd(session: nox.Session) -> None:
    _install(session, "test")
    _pytest(session, "tests/marketplace/bdd/")


@nox.session(python=PYTHON_VERSIONS)
def integration(session: nox.Session) -> None:
    """HTTP endpoints and event-store replay."""
    _install(session, "test")
    _pytest(session, "tests/marketplace/integration/")


@nox.session(python=PYTHON_VERSIONS[-1])
def production(session: nox.Session) -> None:
    """Full suite against the production provider stack (Postgres, Redis, MessageDB)."""
    _install(session, "test", "production")
    session.run("pytest", "--env", "production", *session.posargs)
