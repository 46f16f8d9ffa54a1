"""Shared constants used across the application."""

import re

# Commit Parsing Constants
# ------------------------

PR_SUFFIX_PATTERN = re.compile(r"\s*\(#\d+\)\s*$")
"""Pattern to match a trailing pull request marker in a commit title (e.g. 'fix: x (#12)')."""

PR_NUMBER_PATTERN = re.compile(r"\(#(\d+)\)")
"""Pattern to capture the pull request number from a commit title."""

DEFAULT_TABIFY_SIZE = 2
"""Default number of spaces used to indent commit body lines."""

ABBREV_HASH_LENGTH = 7
"""Length of abbreviated commit hashes."""

# Git Log Constants
# -----------------

GIT_LOG_MAX_COMMITS = 1000
"""Maximum number of commits requested from the log source per query."""

ROOT_FALLBACK = "root"
"""Tag resolution fallback resolving to the repository's first commit."""

HEAD_REF = "HEAD"
"""Tag resolution fallback resolving to the current head."""

# Changelog Constants
# -------------------

DEFAULT_COMMIT_TEMPLATE = "\n- ${scopeHeader} ${commitlint.message} ${commitLink} ${prLink}"
"""Default template used to render a single changelog line."""

DEFAULT_CHANGESET_ROOT = ".changeset"
"""Default changeset directory, relative to the repository root."""

CHANGESET_TEMPLATE = "---\n'${name}': '${increment}'\n---\n\n${changelog}"
"""Content template of a changeset file."""

DEFAULT_INCREMENT = "patch"
"""Default version increment recorded in changeset files."""

INCREMENT_MAJOR_LABEL = "increment:major"
INCREMENT_MINOR_LABEL = "increment:minor"

# Release Naming Constants
# ------------------------

DEFAULT_TAG_TEMPLATE = "${name}@${version}"
DEFAULT_TAG_MATCH = "${name}@*"
DEFAULT_BRANCH_NAME = "release-${tagName}"
DEFAULT_BATCH_BRANCH_NAME = "batch-${releaseName}-${length}-packages-${timestamp}"
DEFAULT_BATCH_TAG_NAME = "batch-${length}-packages-${timestamp}"
DEFAULT_PR_TITLE = "Release ${env} ${pkgName} ${tagName}"
DEFAULT_PR_BODY = "## Release ${tagName}\n\n${changelog}"
BATCH_PR_BODY = "\n## ${name} ${version}\n${changelog}\n"
"""Per-package block of a batch release pull request body."""

DEFAULT_COMMIT_MESSAGE = "chore(tag): ${name} v${version}"

MAX_WORKSPACE = 3
"""Maximum number of packages named in a batch release name."""

MULTI_WORKSPACE_SEPARATOR = "_"
WORKSPACE_VERSION_SEPARATOR = "@"

FALLBACK_TAG_SUFFIX = "-v0.0.0"
"""Suffix of the deterministic tag used when tag lookup fails for a package."""

# Manifest / Tooling Constants
# ----------------------------

MANIFEST_PATH = "package.json"
"""Manifest file read for each package to obtain its name and version."""

DEFAULT_VERSION_BUMP_COMMAND = "pnpm dlx @changesets/cli version --no-changelog"
"""Command invoked once per batch to apply changesets to package manifests."""

GITHUB_DOMAIN = "https://github.com"

# Pull Request Constants
# ----------------------

RELEASE_LABEL_NAME = "CI-Release"
RELEASE_LABEL_COLOR = "#1A7F37"
RELEASE_LABEL_DESCRIPTION = "Release pull request"
"""Label attached to release pull requests."""

DEFAULT_BASE_BRANCH = "main"
