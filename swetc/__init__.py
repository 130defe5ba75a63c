"""swetc: build-target extraction and dependency-cycle analysis for vcxproj, csproj and CMake projects."""

__version__ = "0.1.0"
