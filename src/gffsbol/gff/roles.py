# This source code is part of the gffsbol package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "gffsbol.gff"
__author__ = "The gffsbol contributors"
__all__ = ["DEFINITION_KINDS", "TYPE_ROLES", "classify_roles"]

from ..sbol.terms import GO_NS, SO_NS


# Feature types, that represent concrete DNA regions
# and hence get their own component definition
DEFINITION_KINDS = frozenset(["chromosome", "CDS", "gene"])

TYPE_ROLES = {
    "chromosome":                                SO_NS + "SO:0000340",
    "CDS":                                       SO_NS + "SO:0000316",
    "telomere":                                  SO_NS + "SO:0000624",
    "deletion":                                  SO_NS + "SO:0000159",
    "site_specific_recombination_target_region": SO_NS + "SO:0000342",
    "gene":                                      SO_NS + "SO:0000704",
    "stop_retained_variant":                     SO_NS + "SO:0001567",
    "PCR_product":                               SO_NS + "SO:0000006",
    "tag":                                       SO_NS + "SO:0000324",
    "restriction_enzyme_recognition_site":       SO_NS + "SO:0001687",
    "ARS":                                       SO_NS + "SO:0000436",
    "noncoding_exon":                            SO_NS + "SO:0000198",
}


def classify_roles(type, ontology_term=None):
    """
    Get the ontology roles of a feature.

    The feature type is mapped onto a *Sequence Ontology* term, if the
    type is known.
    Additionally each comma separated entry of the ``Ontology_term``
    attribute, that is a *Gene Ontology* term (``GO:...``), is added
    as role.
    Other ontology terms are ignored.

    Parameters
    ----------
    type : str
        The feature type, i.e. the third column of a record.
    ontology_term : str, optional
        The value of the ``Ontology_term`` attribute.

    Returns
    -------
    roles : list of str
        The role URIs without duplicates.
        The role derived from the type comes first.

    Examples
    --------

    >>> for role in classify_roles("gene", "GO:0005634,SO:0000001,GO:0003674"):
    ...     print(role)
    http://identifiers.org/so/SO:0000704
    http://identifiers.org/go/GO:0005634
    http://identifiers.org/go/GO:0003674
    """
    roles = []
    type_role = TYPE_ROLES.get(type)
    if type_role is not None:
        roles.append(type_role)
    if ontology_term:
        for term in ontology_term.split(","):
            if term.startswith("GO:"):
                role = GO_NS + term
                if role not in roles:
                    roles.append(role)
    return roles
