import importlib

mod = "xml2py"
class LazyLoader:
    """
    Lazy loader for the xml2py functions to speed up startup time.
    """
    def __init__(self, mappings):
        self._modules = {}
        self._mappings = mappings

    def _load_module(self, module_name):
        if module_name not in self._modules:
            self._modules[module_name] = importlib.import_module(module_name)
        return self._modules[module_name]

    def __getattr__(self, item):
        if item in self._mappings:
            module_name, func_name = self._mappings[item]
            module = self._load_module(module_name)
            return getattr(module, func_name)
        else:
            return self._load_module(f"{mod}.{item}")

# Define the functions and their corresponding module paths
_mappings = {
    "XmlConverter": (f"{mod}.schema_inference", "XmlConverter"),
    "combine": (f"{mod}.schema_inference", "combine"),
    "convert_xml_files": (f"{mod}.schema_inference", "convert_xml_files"),
    "convert_xml_to_tree": (f"{mod}.schema_inference", "convert_xml_to_tree"),
    "XmlToPython": (f"{mod}.xmltopython", "XmlToPython"),
    "convert_xml_to_python": (f"{mod}.xmltopython", "convert_xml_to_python"),
    "convert_xml_strings_to_python": (f"{mod}.xmltopython", "convert_xml_strings_to_python"),
}

_lazy_loader = LazyLoader(_mappings)

def __getattr__(name):
    return getattr(_lazy_loader, name)
