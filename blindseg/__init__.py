import logging
logger = logging.getLogger('blindseg')
yaml_logger = logging.getLogger('yaml')
file_logger = logging.getLogger('blindseg_file')

import yaml

# all Serializable objects must be imported here in order to be parsable
# using the !Classname YAML syntax
import blindseg.chars
import blindseg.filters
import blindseg.tasks
import blindseg.tee

from blindseg.persistence import Serializable, init_representer

seen_yaml_tags = set()
for SerializableChild in Serializable.__subclasses__():
  assert hasattr(SerializableChild, "yaml_tag"),\
    f"missing yaml_tag attribute for class {SerializableChild.__name__}"
  assert SerializableChild.yaml_tag == f"!{SerializableChild.__name__}", \
    f"misnamed yaml_tag attribute for class {SerializableChild.__name__}"
  assert SerializableChild.yaml_tag not in seen_yaml_tags, \
    f"encountered naming conflict: more than one class with yaml_tag='{SerializableChild.yaml_tag}'. " \
    f"Change to a unique class name."
  assert getattr(SerializableChild.__init__, "uses_serializable_init",
                 False), f"{SerializableChild.__name__}.__init__() must be wrapped in @serializable_init."
  seen_yaml_tags.add(SerializableChild.yaml_tag)
  yaml.add_representer(SerializableChild, init_representer)
