"""
This module takes care of loading and saving YAML files. Run files and the effective configuration saved next to a
run's log are stored in the same YAML file format.

The main objects to be aware of are:

* :class:`Serializable`: must be subclassed by all components that are specified in a YAML file.
* :class:`RunLoader`: loads run descriptions from YAML, but does not initialize components.
* :meth:`initialize_if_needed`, :meth:`initialize_object`: initialize a preloaded YAML tree bottom-up.
* :meth:`save_to_file`: saves an initialized component hierarchy as YAML.
"""

import collections.abc
import copy
import inspect
import logging
logger = logging.getLogger('blindseg')
import os
from functools import wraps
from typing import Any, Callable, Dict, List, Union

import yaml

from blindseg import utils

def serializable_init(f):
  @wraps(f)
  def wrapper(obj, *args, **kwargs):
    serialize_params = dict(kwargs)
    params = inspect.signature(f).parameters
    if len(args) > 0:
      param_names = [p.name for p in list(params.values())]
      assert param_names[0] == "self"
      param_names = param_names[1:]
      for i, arg in enumerate(args):
        serialize_params[param_names[i]] = arg
    for param in params.values():
      if param.name != "self" and param.default != inspect.Parameter.empty and param.name not in serialize_params:
        serialize_params[param.name] = copy.deepcopy(param.default)
    f(obj, **serialize_params)
    serialize_params.update(getattr(obj, "serialize_params", {}))
    obj.serialize_params = serialize_params
    obj.init_completed = True

  wrapper.uses_serializable_init = True
  return wrapper

class Serializable(yaml.YAMLObject):
  """
  All components that appear in a YAML file must inherit from Serializable.
  Implementing classes must specify a unique yaml_tag class attribute, e.g. ``yaml_tag = "!Serializable"``
  """
  @serializable_init
  def __init__(self) -> None:
    """
    Initialize class.

    The __init__() must always be annotated with @serializable_init. Its arguments are exactly those that can be
    specified in a YAML file. If the argument values are Serializable, they are initialized before being passed
    to this class.
    """
    # attributes that are in the YAML file (never change this manually, use Serializable.save_processed_arg() instead)
    self.serialize_params = {}

  def save_processed_arg(self, key: str, val: Any) -> None:
    """
    Save a new value for an init argument (call from within ``__init__()``).

    This is useful to store a normalized form of an argument, so that the saved configuration describes exactly what
    was used.

    Args:
      key: name of property, must match an argument of ``__init__()``
      val: new value; a :class:`Serializable` or basic Python type or list or dict of these
    """
    if not hasattr(self, "serialize_params"):
      self.serialize_params = {}
    if key not in _get_init_args_defaults(self):
      raise ValueError(f"{key} is not an init argument of {self}")
    self.serialize_params[key] = val

  def add_serializable_component(self, name: str, passed: Any, create_fct: Callable[[], Any]) -> Any:
    """
    Create a :class:`Serializable` component unless one has been passed.

    The idiom for using this for an argument named ``my_comp`` would be::

      def __init__(self, my_comp=None, other_args, ...):
        my_comp = self.add_serializable_component("my_comp", my_comp, lambda: SomeSerializable(other_args))

    Args:
      name: name of the object
      passed: object as passed in the constructor. If ``None``, will be created using create_fct.
      create_fct: a callable with no arguments that returns a :class:`Serializable`

    Returns:
      reused or newly created object.
    """
    if passed is None:
      initialized = create_fct()
      self.save_processed_arg(name, initialized)
      return initialized
    else:
      return passed

  def __repr__(self):
    return f"{self.__class__.__name__}@{id(self)}"


class UninitializedYamlObject(object):
  """
  Wrapper class to indicate an object created by the YAML parser that still needs initialization.

  Args:
    data: uninitialized object
  """

  def __init__(self, data: Any) -> None:
    if isinstance(data, UninitializedYamlObject):
      raise AssertionError
    self.data = data

  def get(self, key: str, default: Any) -> Any:
    return getattr(self.data, key, default)


def _get_init_args_defaults(obj):
  return inspect.signature(obj.__init__).parameters

def _yaml_children(node):
  return [(key, val) for key, val in vars(node).items() if not key.startswith("_")]

def _check_serializable_args_valid(node: Serializable) -> None:
  base_arg_names = set(_get_init_args_defaults(node).keys())
  for name, _ in _yaml_children(node):
    if name not in base_arg_names:
      raise ValueError(f"'{name}' is not an accepted argument of {type(node).__name__}.__init__()."
                       f" Valid are {sorted(base_arg_names)}")

def _load_yaml(filename: str) -> Any:
  try:
    with open(filename, encoding="utf-8") as stream:
      return yaml.load(stream, Loader=yaml.Loader)
  except IOError as e:
    raise RuntimeError(f"Could not read run file {filename}: {e}")
  except yaml.constructor.ConstructorError:
    logger.error(
      "for proper deserialization of a class object, make sure the class is a subclass of "
      "blindseg.persistence.Serializable, specifies a proper yaml_tag with leading '!', and its module is "
      "imported under blindseg/__init__.py")
    raise


class RunLoader(object):
  """
  Loads runs from YAML and performs basic preparation, but does not initialize objects.

  A run file is a dictionary mapping run names to tasks. The loader takes care of extracting individual runs and of
  replacing the placeholder strings ``{RUN}``, ``{RUN_DIR}`` and ``{PID}``, including inside string-valued default
  arguments that were not given in the file.
  """

  @staticmethod
  def run_names_from_file(filename: str) -> List[str]:
    """Return list of run names.

    Args:
      filename: path to YAML file
    Returns:
      run names occurring in the given file in lexicographic order.
    """
    runs = _load_yaml(filename)
    if not isinstance(runs, dict):
      raise TypeError(f"Top level of run file must be a dict of named runs. Found: {runs} of type {type(runs)}.")
    return sorted(runs.keys())

  @staticmethod
  def load_run_from_file(filename: str, run_name: str) -> UninitializedYamlObject:
    """Preload a run from a YAML file.

    Args:
      filename: YAML run file name
      run_name: name of run to load

    Returns:
      Preloaded but uninitialized object.
    """
    runs = _load_yaml(filename)
    if not isinstance(runs, dict) or run_name not in runs:
      raise ValueError(f"No run of name '{run_name}' exists in {filename}.")
    return RunLoader.preload_obj(runs[run_name], run_name=run_name, run_dir=os.path.dirname(filename) or ".")

  @staticmethod
  def preload_obj(root: Any, run_name: str, run_dir: str) -> UninitializedYamlObject:
    placeholders = {"RUN": run_name,
                    "PID": os.getpid(),
                    "RUN_DIR": run_dir}
    root = RunLoader._format_strings(root, placeholders)
    return UninitializedYamlObject(root)

  @staticmethod
  def _format_strings(node: Any, format_dict: Dict[str, Any]) -> Any:
    if isinstance(node, str):
      try:
        return node.format(**format_dict)
      except (ValueError, KeyError, IndexError):  # will occur e.g. if a value contains a curly bracket
        return node
    elif isinstance(node, Serializable):
      for key, val in _yaml_children(node):
        setattr(node, key, RunLoader._format_strings(val, format_dict))
      given = set(key for key, _ in _yaml_children(node))
      for expected_arg, param in _get_init_args_defaults(node).items():
        if expected_arg not in given and isinstance(param.default, str):
          formatted = RunLoader._format_strings(param.default, format_dict)
          if formatted != param.default:
            setattr(node, expected_arg, formatted)
      return node
    elif isinstance(node, collections.abc.MutableMapping):
      return {key: RunLoader._format_strings(val, format_dict) for key, val in node.items()}
    elif isinstance(node, collections.abc.MutableSequence):
      return [RunLoader._format_strings(val, format_dict) for val in node]
    return node


class _YamlDeserializer(object):

  def initialize_if_needed(self, obj: Union[Serializable, UninitializedYamlObject]) -> Any:
    if self.is_initialized(obj): return obj
    else: return self.initialize_object(deserialized_yaml_wrapper=obj)

  @staticmethod
  def is_initialized(obj: Union[Serializable, UninitializedYamlObject]) -> bool:
    return type(obj) != UninitializedYamlObject

  def initialize_object(self, deserialized_yaml_wrapper: UninitializedYamlObject) -> Any:
    if self.is_initialized(deserialized_yaml_wrapper):
      raise AssertionError()
    # make a copy to avoid side effects
    deserialized_yaml = copy.deepcopy(deserialized_yaml_wrapper.data)
    return self.init_components_bottom_up(deserialized_yaml, path="")

  def init_components_bottom_up(self, node: Any, path: str) -> Any:
    if isinstance(node, Serializable) and not getattr(node, "init_completed", False):
      _check_serializable_args_valid(node)
      init_params = {key: self.init_components_bottom_up(val, f"{path}.{key}") for key, val in _yaml_children(node)}
      return self.init_component(node, init_params, path)
    elif isinstance(node, collections.abc.MutableMapping):
      return {key: self.init_components_bottom_up(val, f"{path}.{key}") for key, val in node.items()}
    elif isinstance(node, collections.abc.MutableSequence):
      return [self.init_components_bottom_up(val, f"{path}.{i}") for i, val in enumerate(node)]
    return node

  def init_component(self, obj: Serializable, init_params: Dict[str, Any], path: str) -> Serializable:
    with utils.ReportOnException({"yaml_path": path or "."}):
      try:
        initialized_obj = obj.__class__(**init_params)
        logger.debug(f"initialized {path or '.'}: {obj.__class__.__name__}@{id(initialized_obj)}({init_params})"[:1000])
      except TypeError as e:
        raise ComponentInitError(f"An error occurred when calling {type(obj).__name__}.__init__()\n"
                                 f" The following arguments were passed: {init_params}\n"
                                 f" The following arguments were expected: {list(_get_init_args_defaults(obj).keys())}\n"
                                 f" Current path: {path or '.'}\n"
                                 f" Error message: {e}")
    return initialized_obj


def init_representer(dumper, obj):
  return dumper.represent_mapping(obj.yaml_tag, obj.serialize_params)

def _dump(ser_obj: Any) -> str:
  return yaml.dump(ser_obj, allow_unicode=True)

def save_to_file(fname: str, mod: Any) -> None:
  """
  Save a component hierarchy to disk.

  Args:
    fname: Filename to save to.
    mod: Component hierarchy.
  """
  utils.make_parent_dir(fname)
  with open(fname, 'w', encoding="utf-8") as f:
    f.write(_dump(mod))


def initialize_if_needed(root: Union[Any, UninitializedYamlObject]) -> Any:
  """
  Initialize if obj has not yet been initialized.

  Args:
    root: object to be potentially initialized

  Returns:
    initialized object
  """
  return _YamlDeserializer().initialize_if_needed(root)

def initialize_object(root: UninitializedYamlObject) -> Any:
  """
  Initialize an uninitialized object.

  Args:
    root: object to be initialized

  Returns:
    initialized object
  """
  return _YamlDeserializer().initialize_object(root)


class ComponentInitError(Exception):
  pass
