"""Repository reference parsing and ref selection for degit.

Everything here is a pure function over strings — no git, no network.
"""

from __future__ import annotations

import re
from typing import TypeGuard

from seda.core.models import RemoteRef, RepoSpec
from seda.exceptions import InvalidRepositoryError

SUPPORTED_SITES: frozenset[str] = frozenset({"github", "gitlab", "bitbucket", "git.sr.ht"})

_DOMAINS: dict[str, str] = {
    "github": "github.com",
    "gitlab": "gitlab.com",
    "bitbucket": "bitbucket.org",
    "git.sr.ht": "git.sr.ht",
}

# host/   git@host:   site:     user / repo   /sub/dir   /   #ref
_REPO_PATTERN = re.compile(
    r"""
    ^(?:
        (?:https://)?(?P<host>[^:/]+\.[^:/]+)/
        | git@(?P<ssh_host>[^:/]+)[:/]
        | (?P<site>[^/]+):
    )?
    (?P<user>[^/\s]+)/(?P<name>[^/\s#]+)
    (?P<subdir>(?:/[^/\s#]+)+)?
    /?
    (?:\#(?P<ref>.+))?$
    """,
    re.VERBOSE,
)


# user/repo or site:user/repo, optionally with #ref; no sub-directory, so
# relative paths like ./out or out/dir/sub stay destinations.
_SHORTHAND_PATTERN = re.compile(
    r"^(?:(?:github|gitlab|bitbucket|git\.sr\.ht):)?~?[\w-][\w.-]*/[\w.-]+(?:#\S+)?$",
)


def looks_like_url(value: str | None) -> TypeGuard[str]:
    """Return ``True`` when *value* should be degit-ed directly.

    URLs, known hosts, and ``[site:]user/repo[#ref]`` shorthands qualify.
    Anything else is a destination for interactive mode.
    """
    if not value:
        return False
    if "github.com" in value or value.startswith(("http", "git@")):
        return True
    if any(value.startswith(f"{domain}/") for domain in _DOMAINS.values()):
        return True
    return _SHORTHAND_PATTERN.match(value) is not None


def parse_repo_url(src: str) -> RepoSpec:
    """Parse *src* into a :class:`RepoSpec`.

    Accepted forms::

        https://github.com/user/repo
        github.com/user/repo/sub/dir#v1.2.0
        git@gitlab.com:user/repo.git
        bitbucket:user/repo
        user/repo#main

    Raises
    ------
    InvalidRepositoryError
        For unparseable input or an unsupported host.
    """
    match = _REPO_PATTERN.match(src.strip())
    if match is None:
        raise InvalidRepositoryError(
            f"could not parse repository: {src}",
            hint="Use a form like https://github.com/user/repo or user/repo#ref.",
        )

    raw_site = match["host"] or match["ssh_host"] or match["site"] or "github"
    site = re.sub(r"\.(com|org)$", "", raw_site)
    if site not in SUPPORTED_SITES:
        raise InvalidRepositoryError(
            f"unsupported repository host: {raw_site}",
            hint="Supported hosts: " + ", ".join(sorted(SUPPORTED_SITES)) + ".",
        )

    user = match["user"]
    name = match["name"].removesuffix(".git")
    domain = _DOMAINS[site]

    return RepoSpec(
        site=site,
        user=user,
        name=name,
        ref=match["ref"] or "HEAD",
        url=f"https://{domain}/{user}/{name}",
        ssh=f"git@{domain}:{user}/{name}",
        subdir=match["subdir"],
    )


def archive_url(repo: RepoSpec, commit: str) -> str:
    """Return the tarball URL of *commit* on the repository's host."""
    if repo.site == "gitlab":
        return f"{repo.url}/repository/archive.tar.gz?ref={commit}"
    if repo.site == "bitbucket":
        return f"{repo.url}/get/{commit}.tar.gz"
    return f"{repo.url}/archive/{commit}.tar.gz"


# ---------------------------------------------------------------------------
# Refs
# ---------------------------------------------------------------------------

_REF_TYPES: dict[str, str] = {"heads": "branch", "tags": "tag", "refs": "ref"}


def parse_remote_refs(output: str) -> list[RemoteRef]:
    """Parse ``git ls-remote`` output into :class:`RemoteRef` entries.

    Peeled tag lines (``^{}``) resolve to the tagged commit and replace
    the annotated-tag object.
    """
    refs: list[RemoteRef] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        commit, _, ref = line.partition("\t")
        commit = commit.strip()
        ref = ref.strip()

        if ref == "HEAD":
            refs.append(RemoteRef(type="HEAD", name=None, hash=commit))
            continue

        match = re.match(r"refs/(\w+)/(.+)", ref)
        if match is None:
            continue
        namespace, name = match.groups()
        if name.endswith("^{}"):
            name = name.removesuffix("^{}")
            refs = [r for r in refs if not (r.type == "tag" and r.name == name)]
        refs.append(
            RemoteRef(type=_REF_TYPES.get(namespace, namespace), name=name, hash=commit),
        )
    return refs


def select_ref(refs: list[RemoteRef], selector: str) -> str | None:
    """Return the commit hash *selector* points at, or ``None``.

    ``HEAD`` picks the remote HEAD.  Otherwise an exact ref-name match
    wins; selectors of eight or more characters may also match a commit
    hash prefix.
    """
    if selector == "HEAD":
        for ref in refs:
            if ref.type == "HEAD":
                return ref.hash
        return None

    for ref in refs:
        if ref.name == selector:
            return ref.hash

    if len(selector) < 8:
        return None

    for ref in refs:
        if ref.hash.startswith(selector):
            return ref.hash
    return None
