from .data_faker import ContactDataGenerator, ContactFormData
from .yaml_cases_loader import InvalidYamlFormatError, load_yaml_file

__all__ = [
    "ContactDataGenerator",
    "ContactFormData",
    "InvalidYamlFormatError",
    "load_yaml_file",
]
