from .concatenator import YamlConcatenator, concatenate

__all__ = ["YamlConcatenator", "concatenate"]
