"""Core layer package.

This package contains the shapes shared by every other layer:
- errors: Exception taxonomy
- models: TypeKind, ConstructorSignature and plan steps
- protocols: Fake factory and transaction collaborator contracts
"""
