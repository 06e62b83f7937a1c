"""Exclusion rules and user mount filters."""

import os
import sys
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Tuple

# Overlay/union, virtual-device and kernel pseudo filesystems
PSEUDO_FILESYSTEMS = frozenset({
    "overlay",
    "overlayfs",
    "aufs",
    "unionfs",
    "fuse.unionfs",
    "devfs",
    "devtmpfs",
    "devpts",
    "proc",
    "sysfs",
    "cgroup",
    "cgroup2",
    "tmpfs",
    "squashfs",
    "autofs",
    "debugfs",
    "tracefs",
    "securityfs",
    "pstore",
    "bpf",
    "configfs",
    "mqueue",
    "hugetlbfs",
    "fusectl",
    "binfmt_misc",
    "nsfs",
    "efivarfs",
    "rpc_pipefs",
    "nullfs",
})

POSIX_EXCLUDED_PREFIXES = ("/snap", "/proc", "/sys", "/dev", "/boot")
DARWIN_EXCLUDED_PREFIXES = ("/System/Volumes", "/private/var/vm")

DEVICE_ROOT = "/dev"


def is_under(path: str, prefix: str) -> bool:
    """Check whether path is prefix itself or lies below it."""
    prefix = prefix.rstrip("/")
    if not prefix:
        return path.startswith("/")
    return path == prefix or path.startswith(prefix + "/")


def is_nested_var(path: str) -> bool:
    """Sub-mounts of /var are skipped; /var itself is kept."""
    return path.startswith("/var/")


@dataclass(frozen=True)
class ExclusionRules:
    """Structural exclusion rules for one platform."""

    excluded_prefixes: Tuple[str, ...] = POSIX_EXCLUDED_PREFIXES
    pseudo_filesystems: FrozenSet[str] = PSEUDO_FILESYSTEMS
    skip_nested_var: bool = True

    @classmethod
    def for_platform(
        cls,
        platform: Optional[str] = None,
        extra_prefixes: Iterable[str] = (),
        extra_filesystems: Iterable[str] = (),
    ) -> "ExclusionRules":
        """
        Build the rule set for a platform.

        Args:
            platform: sys.platform style name, defaults to the running one
            extra_prefixes: Additional path prefixes to exclude
            extra_filesystems: Additional filesystem types to exclude

        Returns:
            ExclusionRules for that platform
        """
        platform = platform or sys.platform
        prefixes = POSIX_EXCLUDED_PREFIXES
        if platform == "darwin":
            prefixes = prefixes + DARWIN_EXCLUDED_PREFIXES
        elif platform.startswith("win"):
            prefixes = ()

        return cls(
            excluded_prefixes=prefixes + tuple(extra_prefixes),
            pseudo_filesystems=PSEUDO_FILESYSTEMS | {fs.lower() for fs in extra_filesystems},
            skip_nested_var=not platform.startswith("win"),
        )

    def excludes_filesystem(self, filesystem_type: str) -> bool:
        return bool(filesystem_type) and filesystem_type.lower() in self.pseudo_filesystems

    def excludes_path(self, path: str) -> bool:
        if self.skip_nested_var and is_nested_var(path):
            return True
        return any(is_under(path, prefix) for prefix in self.excluded_prefixes)

    def excludes(self, path: str, filesystem_type: str = "") -> bool:
        return self.excludes_filesystem(filesystem_type) or self.excludes_path(path)

    def is_virtual_device(self, path: str) -> bool:
        """Paths that are device nodes or resolve into /dev are not storage."""
        if not os.path.isabs(path):
            return True
        if is_under(path, DEVICE_ROOT):
            return True
        return is_under(os.path.realpath(path), DEVICE_ROOT)


@dataclass(frozen=True)
class MountFilters:
    """User include/exclude lists; None means no filter."""

    include: Optional[FrozenSet[str]] = None
    exclude: Optional[FrozenSet[str]] = None

    @classmethod
    def from_lists(
        cls,
        include: Optional[Iterable[str]] = None,
        exclude: Optional[Iterable[str]] = None,
    ) -> "MountFilters":
        return cls(
            include=frozenset(include) if include is not None else None,
            exclude=frozenset(exclude) if exclude is not None else None,
        )

    def allows(self, path: str) -> bool:
        if self.include is not None and path not in self.include:
            return False
        if self.exclude is not None and path in self.exclude:
            return False
        return True


def split_paths(value: Optional[str]) -> Optional[FrozenSet[str]]:
    """Parse a comma-separated mount path list from the command line."""
    if value is None:
        return None
    return frozenset(part.strip() for part in value.split(",") if part.strip())
