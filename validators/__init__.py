from .mapping_validator import MappingValidator, validate_mapping

__all__ = ["MappingValidator", "validate_mapping"]
