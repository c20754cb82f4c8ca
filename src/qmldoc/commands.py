"""Names of the documentation commands recognized in QML files."""

COMMAND_ABSTRACT = "abstract"
COMMAND_BRIEF = "brief"
COMMAND_DEFAULT = "default"
COMMAND_DEPRECATED = "deprecated"
COMMAND_INGROUP = "ingroup"
COMMAND_INHERITS = "inherits"
COMMAND_INMODULE = "inmodule"
COMMAND_INQMLMODULE = "inqmlmodule"
COMMAND_INTERNAL = "internal"
COMMAND_NEXTPAGE = "nextpage"
COMMAND_NONREENTRANT = "nonreentrant"
COMMAND_OBSOLETE = "obsolete"
COMMAND_PRELIMINARY = "preliminary"
COMMAND_PREVIOUSPAGE = "previouspage"
COMMAND_QMLABSTRACT = "qmlabstract"
COMMAND_QMLDEFAULT = "qmldefault"
COMMAND_QMLENUMERATORSFROM = "qmlenumeratorsfrom"
COMMAND_QMLINSTANTIATES = "qmlinstantiates"
COMMAND_QMLREADONLY = "readonly"
COMMAND_QMLREQUIRED = "required"
COMMAND_REENTRANT = "reentrant"
COMMAND_SINCE = "since"
COMMAND_STARTPAGE = "startpage"
COMMAND_SUBTITLE = "subtitle"
COMMAND_THREADSAFE = "threadsafe"
COMMAND_TITLE = "title"
COMMAND_WRAPPER = "wrapper"

COMMAND_QMLATTACHEDMETHOD = "qmlattachedmethod"
COMMAND_QMLATTACHEDPROPERTY = "qmlattachedproperty"
COMMAND_QMLATTACHEDSIGNAL = "qmlattachedsignal"
COMMAND_QMLMETHOD = "qmlmethod"
COMMAND_QMLMODULE = "qmlmodule"
COMMAND_QMLPROPERTY = "qmlproperty"
COMMAND_QMLSIGNAL = "qmlsignal"
COMMAND_QMLTYPE = "qmltype"
COMMAND_QMLVALUETYPE = "qmlvaluetype"

QML_METACOMMANDS = frozenset({
    COMMAND_ABSTRACT,
    COMMAND_DEFAULT,
    COMMAND_DEPRECATED,
    COMMAND_INGROUP,
    COMMAND_INHERITS,
    COMMAND_INMODULE,
    COMMAND_INQMLMODULE,
    COMMAND_INTERNAL,
    COMMAND_NEXTPAGE,
    COMMAND_NONREENTRANT,
    COMMAND_OBSOLETE,
    COMMAND_PRELIMINARY,
    COMMAND_PREVIOUSPAGE,
    COMMAND_QMLABSTRACT,
    COMMAND_QMLDEFAULT,
    COMMAND_QMLENUMERATORSFROM,
    COMMAND_QMLINSTANTIATES,
    COMMAND_QMLREADONLY,
    COMMAND_QMLREQUIRED,
    COMMAND_REENTRANT,
    COMMAND_SINCE,
    COMMAND_STARTPAGE,
    COMMAND_SUBTITLE,
    COMMAND_THREADSAFE,
    COMMAND_TITLE,
    COMMAND_WRAPPER,
})

QML_TOPICS = frozenset({
    COMMAND_QMLATTACHEDMETHOD,
    COMMAND_QMLATTACHEDPROPERTY,
    COMMAND_QMLATTACHEDSIGNAL,
    COMMAND_QMLMETHOD,
    COMMAND_QMLMODULE,
    COMMAND_QMLPROPERTY,
    COMMAND_QMLSIGNAL,
    COMMAND_QMLTYPE,
    COMMAND_QMLVALUETYPE,
})

# Commands that never take an argument; parsing continues on the same line
NO_ARGUMENT_COMMANDS = frozenset({
    COMMAND_ABSTRACT,
    COMMAND_INTERNAL,
    COMMAND_NONREENTRANT,
    COMMAND_OBSOLETE,
    COMMAND_PRELIMINARY,
    COMMAND_QMLABSTRACT,
    COMMAND_QMLDEFAULT,
    COMMAND_QMLREADONLY,
    COMMAND_QMLREQUIRED,
    COMMAND_REENTRANT,
    COMMAND_THREADSAFE,
    COMMAND_WRAPPER,
})
