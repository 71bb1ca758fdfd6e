"""
Shared test data, imported by the test modules with `from typedcas.tests import *`
"""

NEG_DOC = "do not go"

EN_DOC = "Is this a list? Yes, and it does not stop."

NEG_TYPE = "de.tudarmstadt.ukp.dkpro.core.api.syntax.type.dependency.NEG"
CONJ_POS_TYPE = "de.tudarmstadt.ukp.dkpro.core.api.lexmorph.type.pos.CONJ"
CONJ_DEP_TYPE = "de.tudarmstadt.ukp.dkpro.core.api.syntax.type.dependency.CONJ"

# a small descriptor in the same shape as the ones JCasGen reads
ANNOTATOR_XML = """<?xml version="1.0" encoding="UTF-8"?>
<typeSystemDescription xmlns="http://uima.apache.org/resourceSpecifier">
  <name>NegationAnnotator</name>
  <types>
    <typeDescription>
      <name>de.tudarmstadt.ukp.dkpro.core.api.syntax.type.dependency.NEG</name>
      <description>Negation modifier</description>
      <supertypeName>de.tudarmstadt.ukp.dkpro.core.api.syntax.type.dependency.Dependency</supertypeName>
    </typeDescription>
    <typeDescription>
      <name>de.tudarmstadt.ukp.dkpro.core.api.syntax.type.dependency.Dependency</name>
      <description>A dependency relation between two tokens.</description>
      <supertypeName>uima.tcas.Annotation</supertypeName>
      <features>
        <featureDescription>
          <name>Governor</name>
          <description>The governor word</description>
          <rangeTypeName>de.tudarmstadt.ukp.dkpro.core.api.segmentation.type.Token</rangeTypeName>
        </featureDescription>
        <featureDescription>
          <name>Dependent</name>
          <rangeTypeName>de.tudarmstadt.ukp.dkpro.core.api.segmentation.type.Token</rangeTypeName>
        </featureDescription>
        <featureDescription>
          <name>DependencyType</name>
          <rangeTypeName>uima.cas.String</rangeTypeName>
        </featureDescription>
      </features>
    </typeDescription>
    <typeDescription>
      <name>de.tudarmstadt.ukp.dkpro.core.api.segmentation.type.Token</name>
      <supertypeName>uima.tcas.Annotation</supertypeName>
    </typeDescription>
  </types>
</typeSystemDescription>
"""
