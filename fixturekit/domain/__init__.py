"""Domain layer package.

This package contains the resolution engine:
- classification: Closed classification of annotations into TypeKind
- constructors: Constructor discovery and selection
- resolver: DependencyResolver
- builder: InstanceBuilder and the Builder facade
- plan: Dry-run description of a build
"""
