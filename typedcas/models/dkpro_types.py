"""
The DKPro Core part-of-speech, constituent and dependency types

Every leaf type here is a pure alias of its parent: it declares no
features of its own and only exists so that annotations can be
filtered by a distinct type.  The features live on the base types.
"""

from typedcas.models.common.type_catalog import ANNOTATION, FS_ARRAY, STRING, FeatureDescriptor, TypeCatalog

DKPRO_API = "de.tudarmstadt.ukp.dkpro.core.api"
SEGMENTATION_PACKAGE = DKPRO_API + ".segmentation.type"
POS_PACKAGE = DKPRO_API + ".lexmorph.type.pos"
CONSTITUENT_PACKAGE = DKPRO_API + ".syntax.type.constituent"
DEPENDENCY_PACKAGE = DKPRO_API + ".syntax.type.dependency"

TOKEN_TYPE = SEGMENTATION_PACKAGE + ".Token"
SENTENCE_TYPE = SEGMENTATION_PACKAGE + ".Sentence"
POS_TYPE = POS_PACKAGE + ".POS"
CONSTITUENT_TYPE = CONSTITUENT_PACKAGE + ".Constituent"
DEPENDENCY_TYPE = DEPENDENCY_PACKAGE + ".Dependency"

# (name, parent, features, description), parents before children
BASE_TYPES = [
    (SENTENCE_TYPE, ANNOTATION, (), "Sentence"),
    (POS_TYPE, ANNOTATION,
     (FeatureDescriptor("PosValue", STRING, None, "Fine-grained POS tag. This is the tag as produced by a POS tagger or obtained from a reader."),),
     "The part of speech of a word or a phrase."),
    (TOKEN_TYPE, ANNOTATION,
     (FeatureDescriptor("pos", POS_TYPE, None, "The part of speech of the token"),),
     "Token is one of the two types commonly produced by a segmenter (the other being Sentence)."),
    (CONSTITUENT_TYPE, ANNOTATION,
     (FeatureDescriptor("constituentType", STRING, None, "Constituent type"),
      FeatureDescriptor("syntacticFunction", STRING, None, "Syntactic function"),
      FeatureDescriptor("parent", ANNOTATION, None, "The parent constituent"),
      FeatureDescriptor("children", FS_ARRAY, ANNOTATION, "The child constituents or tokens")),
     "Constituent of a phrase structure tree"),
    (DEPENDENCY_TYPE, ANNOTATION,
     (FeatureDescriptor("Governor", TOKEN_TYPE, None, "The governor word"),
      FeatureDescriptor("Dependent", TOKEN_TYPE, None, "The dependent word"),
      FeatureDescriptor("DependencyType", STRING, None, "The dependency type")),
     "A dependency relation between two tokens.  The dependency annotation covers the dependent."),
]

POS_TAGS = {
    "ADJ":  "Adjective",
    "ADV":  "Adverb",
    "ART":  "Determiner or article",
    "CARD": "Cardinal number",
    "CONJ": "Conjunction",
    "N":    "Noun",
    "NN":   "Common noun",
    "NP":   "Proper noun",
    "O":    "Other",
    "PP":   "Preposition",
    "PR":   "Pronoun",
    "PUNC": "Punctuation",
    "V":    "Verb",
}

CONSTITUENT_TAGS = {
    "ADJP":   "Adjective phrase",
    "ADVP":   "Adverb phrase",
    "CONJP":  "Conjunction phrase",
    "FRAG":   "Fragment",
    "INTJ":   "Interjection",
    "LST":    "List marker",
    "NAC":    "Not a constituent",
    "NP":     "Noun phrase",
    "NX":     "Head of a complex noun phrase",
    "PP":     "Prepositional phrase",
    "PRN":    "Parenthetical",
    "PRT":    "Particle",
    "QP":     "Quantifier phrase",
    "ROOT":   "Root of a phrase structure tree",
    "RRC":    "Reduced relative clause",
    "S":      "Simple declarative clause",
    "SBAR":   "Clause introduced by a subordinating conjunction",
    "SBARQ":  "Direct question introduced by a wh-word or wh-phrase",
    "SINV":   "Inverted declarative sentence",
    "SQ":     "Inverted yes/no question",
    "UCP":    "Unlike coordinated phrase",
    "VP":     "Verb phrase",
    "WHADJP": "Wh-adjective phrase",
    "WHADVP": "Wh-adverb phrase",
    "WHNP":   "Wh-noun phrase",
    "WHPP":   "Wh-prepositional phrase",
    "X":      "Unknown, uncertain, or unbracketable",
}

# Stanford dependency labels
DEPENDENCY_TAGS = {
    "ABBREV":     "Abbreviation modifier",
    "ACOMP":      "Adjectival complement",
    "ADVCL":      "Adverbial clause modifier",
    "ADVMOD":     "Adverbial modifier",
    "AGENT":      "Agent",
    "AMOD":       "Adjectival modifier",
    "APPOS":      "Appositional modifier",
    "ATTR":       "Attributive",
    "AUX0":       "Auxiliary",
    "AUXPASS":    "Passive auxiliary",
    "CC":         "Coordination",
    "CCOMP":      "Clausal complement",
    "COMPLM":     "Complementizer",
    "CONJ":       "Conjunct",
    "CONJP":      "Multi-word conjunction",
    "COP":        "Copula",
    "CSUBJ":      "Clausal subject",
    "CSUBJPASS":  "Clausal passive subject",
    "DEP":        "Unspecified dependent",
    "DET":        "Determiner",
    "DOBJ":       "Direct object",
    "EXPL":       "Expletive",
    "INFMOD":     "Infinitival modifier",
    "IOBJ":       "Indirect object",
    "MARK":       "Marker",
    "MEASURE":    "Measure-phrase modifier",
    "MWE":        "Multi-word expression",
    "NEG":        "Negation modifier",
    "NN":         "Noun compound modifier",
    "NPADVMOD":   "Noun phrase as adverbial modifier",
    "NSUBJ":      "Nominal subject",
    "NSUBJPASS":  "Passive nominal subject",
    "NUM":        "Numeric modifier",
    "NUMBER":     "Element of compound number",
    "PARATAXIS":  "Parataxis",
    "PARTMOD":    "Participial modifier",
    "PCOMP":      "Prepositional complement",
    "POBJ":       "Object of a preposition",
    "POSS":       "Possession modifier",
    "POSSESSIVE": "Possessive modifier",
    "PRECONJ":    "Preconjunct",
    "PRED":       "Predicate",
    "PREDET":     "Predeterminer",
    "PREP":       "Prepositional modifier",
    "PREPC":      "Prepositional clausal modifier",
    "PRT":        "Phrasal verb particle",
    "PUNCT":      "Punctuation",
    "PURPCL":     "Purpose clause modifier",
    "QUANTMOD":   "Quantifier phrase modifier",
    "RCMOD":      "Relative clause modifier",
    "REF":        "Referent",
    "REL":        "Relative",
    "ROOT":       "Root of the dependency tree",
    "TMOD":       "Temporal modifier",
    "XCOMP":      "Open clausal complement",
    "XSUBJ":      "Controlling subject",
}

LEAF_FAMILIES = [
    (POS_PACKAGE, POS_TYPE, POS_TAGS),
    (CONSTITUENT_PACKAGE, CONSTITUENT_TYPE, CONSTITUENT_TAGS),
    (DEPENDENCY_PACKAGE, DEPENDENCY_TYPE, DEPENDENCY_TAGS),
]

def dkpro_type_table():
    """
    Yield (name, parent) for every leaf type, in a stable order
    """
    for package, parent, tags in LEAF_FAMILIES:
        for tag in tags:
            yield package + "." + tag, parent

def build_dkpro_catalog(catalog=None):
    """
    Register the DKPro base types and all the leaf types into a catalog

    A fresh catalog is made if none is given.  Registering into a catalog
    which already has these types is harmless, since registration is idempotent.
    """
    if catalog is None:
        catalog = TypeCatalog()
    for name, parent, features, description in BASE_TYPES:
        catalog.register(name, parent=parent, features=features, description=description)
    descriptions = {package + "." + tag: description
                    for package, _, tags in LEAF_FAMILIES
                    for tag, description in tags.items()}
    for name, parent in dkpro_type_table():
        catalog.register(name, parent=parent, description=descriptions[name])
    catalog.validate()
    return catalog
