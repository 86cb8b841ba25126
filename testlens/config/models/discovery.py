"""Test file discovery pattern configuration models."""

from pydantic import BaseModel, Field


class TestPatternConfig(BaseModel):
    """Configuration for test file discovery patterns."""

    __test__ = False

    test_patterns: list[str] = Field(
        default=["*test.js", "*test.ts", "*test.gjs", "*test.gts"],
        description="Patterns for finding test files (supports glob patterns)",
    )

    exclude: list[str] = Field(
        default=["*.d.ts", "vendor/*"],
        description="Files and patterns to exclude from scanning",
    )

    exclude_dirs: list[str] = Field(
        default=[
            # Package managers
            "node_modules",
            "bower_components",
            # Build output
            "dist",
            "build",
            "tmp",
            "out",
            ".embroider",
            # Caches
            ".cache",
            ".eslintcache",
            "coverage",
            # Version control
            ".git",
            ".hg",
            ".svn",
            # IDE and editor directories
            ".vscode",
            ".idea",
        ],
        description="Directories to exclude from scanning",
    )
