"""Container base type and option environments.

"""


class Container(object):
    """Container supertype. All the non-primitive datatypes that are
    produced or consumed by the guide tree machinery subclass this class.
    Every container carries a *tid*, a string which uniquely identifies its
    type.

    """
    tid = "guidetree.container.Container"

    def __repr__(self):
        return "<{0}>".format(type(self).__name__)


class Environment(Container):
    """An Environment container object. This object can contain key-value
    pairs that specify options. The environment contains functionality
    to automatically inherit option values. Options are inherited in the
    following order, with sources at the bottom having the highest
    precedence.
    * Defaults specified by the current component.
    * The options specified in the parent environment.
    * The options specified directly when creating this environment.

    The support includes recursively inheriting from any subenvironments that
    may be present in this enviroment. If both a parent and a child specify
    a subenvironment for the same key, the resulting subenvironment contains
    the keys of both, with the child's values taking precedence.

    :param keys: a dict of key-value pairs for this environment
    :param component: an object with a *defaults* dict to inherit default
        option values from
    :param parent: a parent environment to inherit option values from
    """

    tid = "guidetree.container.Environment"

    def __init__(self, keys=None, component=None, parent=None):
        sources = []
        if component is not None:
            sources.append(component.defaults)
        if parent is not None:
            sources.append(parent.keys)
        if keys:
            sources.append(keys)
        self.keys = self._inherit_keys(sources)

    def _inherit_keys(self, sources):
        """Helper method to do the actual recursive inheritance.

        :params sources: a list of dicts with options to inherit, with the
            position in the list specifying their inheritance precedence,
            dicts at the end having the highest precedence
        :returns: a dict with the collapsed options

        """
        d = {}

        for source in sources:
            for key, value in source.items():
                d[key] = value

        for key, value in d.items():
            if isinstance(value, Environment):
                envsources = []
                for source in sources:
                    if key in source and isinstance(source[key], Environment):
                        envsources.append(source[key].keys)
                d[key] = Environment(self._inherit_keys(envsources))

        return d

    def __getitem__(self, key):
        return self.keys[key]

    def __contains__(self, key):
        return key in self.keys

    def get(self, key, default=None):
        return self.keys.get(key, default)

    def __repr__(self):
        return "<Environment keys={0}>".format(sorted(self.keys))
