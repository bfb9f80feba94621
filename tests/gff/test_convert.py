# This source code is part of the gffsbol package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import os
import subprocess
import sys
import warnings
from io import StringIO
from os.path import join
import pytest
import sbol2
from rdflib import RDF, Graph, Namespace, URIRef
import gffsbol.gff as gff
import gffsbol.sbol as sbol
from ..util import data_dir

SBOL = Namespace("http://sbols.org/v2#")
PROV = Namespace("http://www.w3.org/ns/prov#")
DCTERMS = Namespace("http://purl.org/dc/terms/")

PREFIX = gff.URI_PREFIX
ROOT = PREFIX + "yeast_chr11_3_34"


@pytest.fixture
def document():
    file = gff.GFFFile.read(join(data_dir("gff"), "yeast_segment.gff3"))
    with warnings.catch_warnings():
        warnings.simplefilter("error", UserWarning)
        return gff.get_document(file)


@pytest.fixture
def graph(document):
    return _parse(document)


def _parse(document):
    graph = Graph()
    graph.parse(data=sbol.serialize(document), format="xml")
    return graph


def _record(type, start, end, strand, attributes):
    return f"chrXI\tSGD\t{type}\t{start}\t{end}\t.\t{strand}\t.\t{attributes}"


def _read(text):
    return gff.GFFFile.read(StringIO(text))


def _root(document):
    return document.getComponentDefinition(ROOT + "/1")


def test_root(document, graph):
    root = _root(document)
    assert str(root.identity) == ROOT + "/1"
    assert str(root.persistentIdentity) == ROOT
    assert str(root.displayId) == "yeast_chr11_3_34"
    assert str(root.version) == "1"
    assert [str(t) for t in root.types] == [sbol2.BIOPAX_DNA]
    # Children keep the order of the records
    assert [str(anno.displayId) for anno in root.sequenceAnnotations] \
        == ["chrXI_anno", "GENE1_anno", "TEL11L_anno", "tag_1_anno"]
    assert [str(comp.displayId) for comp in root.components] \
        == ["chrXI_component", "GENE1_component"]
    assert (URIRef(ROOT + "/1"), RDF.type, SBOL.ComponentDefinition) in graph


def test_sequence(graph):
    sequence = URIRef(ROOT + "_seq/1")
    assert (URIRef(ROOT + "/1"), SBOL.sequence, sequence) in graph
    assert str(graph.value(sequence, SBOL.elements)) == "acgtacgttttt"
    assert graph.value(sequence, SBOL.encoding) \
        == URIRef(sbol2.SBOL_ENCODING_IUPAC)


def test_merged_locations(document, graph):
    """
    Both records with ``ID=GENE1`` are merged into one annotation with
    two consecutively numbered locations.
    """
    annotation = URIRef(ROOT + "/GENE1_anno/1")
    assert (URIRef(ROOT + "/1"), SBOL.sequenceAnnotation, annotation) \
        in graph
    assert str(graph.value(annotation, DCTERMS.title)) == "YKL001"
    locations = [
        URIRef(ROOT + "/GENE1_anno/range/1"),
        URIRef(ROOT + "/GENE1_anno/range2/1"),
    ]
    assert set(graph.objects(annotation, SBOL.location)) == set(locations)
    assert [
        (graph.value(loc, SBOL.start).toPython(),
         graph.value(loc, SBOL.end).toPython())
        for loc in locations
    ] == [(1, 4), (7, 10)]
    for loc in locations:
        assert (loc, RDF.type, SBOL.Range) in graph
        assert str(graph.value(loc, DCTERMS.title)) == "YKL001"


def test_location_numbering():
    lines = [
        _record("exon", i, i + 1, "+", "ID=E1") for i in range(1, 10, 2)
    ]
    document = gff.get_document(_read("\n".join(lines) + "\n>seq\nacgtacgtac"))
    annotations = list(_root(document).sequenceAnnotations)
    assert len(annotations) == 1
    assert [str(loc.displayId) for loc in annotations[0].locations] \
        == ["range", "range2", "range3", "range4", "range5"]


def test_orientation(graph):
    orientations = [
        graph.value(URIRef(ROOT + f"/{feature}_anno/range/1"), SBOL.orientation)
        for feature in ("chrXI", "GENE1", "TEL11L", "tag_1")
    ]
    assert orientations == [
        None,
        URIRef(sbol2.SBOL_ORIENTATION_INLINE),
        URIRef(sbol2.SBOL_ORIENTATION_REVERSE_COMPLEMENT),
        None,
    ]


def test_definitions(graph):
    """
    Only chromosomes, CDS and genes get a definition and a component.
    """
    chromosome = URIRef(PREFIX + "chrXI/1")
    gene = URIRef(PREFIX + "GENE1/1")
    assert (chromosome, RDF.type, SBOL.ComponentDefinition) in graph
    assert (gene, RDF.type, SBOL.ComponentDefinition) in graph
    assert (URIRef(PREFIX + "TEL11L/1"), None, None) not in graph
    assert (URIRef(PREFIX + "tag_1/1"), None, None) not in graph

    assert str(graph.value(chromosome, DCTERMS.title)) == "chrXI"
    assert str(graph.value(chromosome, DCTERMS.description)) \
        == "Chromosome XI"
    assert set(graph.objects(chromosome, SBOL.role)) \
        == {URIRef("http://identifiers.org/so/SO:0000340")}
    assert str(graph.value(chromosome, URIRef(sbol.GFF3_SOURCE))) == "SGD"

    assert str(graph.value(gene, DCTERMS.title)) == "YKL001"
    assert graph.value(gene, DCTERMS.description) is None
    assert set(graph.objects(gene, SBOL.role)) == {
        URIRef("http://identifiers.org/so/SO:0000704"),
        URIRef("http://identifiers.org/go/GO:0005634"),
        URIRef("http://identifiers.org/go/GO:0003674"),
    }

    component = URIRef(ROOT + "/GENE1_component/1")
    assert (URIRef(ROOT + "/1"), SBOL.component, component) in graph
    assert graph.value(component, SBOL.definition) == gene
    assert graph.value(URIRef(ROOT + "/GENE1_anno/1"), SBOL.component) \
        == component
    # Non-definition features have no component
    assert graph.value(URIRef(ROOT + "/TEL11L_anno/1"), SBOL.component) \
        is None


def test_provenance(graph):
    first = URIRef(PREFIX + "prov2/1")
    second = URIRef(PREFIX + "prov1/1")
    assert set(graph.subjects(RDF.type, PROV.Activity)) == {first, second}

    assert str(graph.value(first, DCTERMS.title)) == "ToolX"
    assert str(graph.value(first, DCTERMS.description)) \
        == "productA created from chrXI 200101 by ToolX (desc); extra note"
    usage = graph.value(first, PROV.qualifiedUsage)
    assert usage == URIRef(PREFIX + "prov2/usage/1")
    assert graph.value(usage, PROV.entity) == URIRef(PREFIX + "chrXI")
    assert graph.value(usage, PROV.hadRole) == URIRef(sbol.SOURCE_ROLE)

    assert str(graph.value(second, DCTERMS.title)) == "ToolY"
    assert str(graph.value(second, DCTERMS.description)) \
        == "GENE1 created from chrXI 200215 by ToolY (recoding); " \
           "first line; second line"
    assert str(graph.value(second, PROV.endedAtTime)) \
        .startswith("2020-02-15T00:00:00")

    product = URIRef(PREFIX + "productA/1")
    assert graph.value(product, PROV.wasDerivedFrom) == first
    assert str(graph.value(product, DCTERMS.description)) \
        == gff.PLACEHOLDER_DESCRIPTION
    # The gene was defined by a record and is not replaced
    gene = URIRef(PREFIX + "GENE1/1")
    assert graph.value(gene, PROV.wasDerivedFrom) == second
    assert graph.value(gene, DCTERMS.description) is None
    assert len(set(graph.subjects(RDF.type, SBOL.ComponentDefinition))) == 4


def test_record_after_placeholder():
    """
    A record defining a product that was only known from provenance
    so far is merged into the placeholder definition.
    """
    text = "\n".join([
        "# G1 created from chrXI 200101 by ToolX (desc)",
        _record("gene", 1, 4, "+", "ID=G1;Name=G1;Note=a%20gene"),
        ">seq",
        "acgt",
    ])
    with pytest.warns(UserWarning, match="already exists"):
        document = gff.get_document(_read(text))
    graph = _parse(document)
    definition = URIRef(PREFIX + "G1/1")
    assert str(graph.value(definition, DCTERMS.description)) == "a gene"
    assert graph.value(definition, PROV.wasDerivedFrom) \
        == URIRef(PREFIX + "prov1/1")
    assert len(set(graph.subjects(RDF.type, SBOL.ComponentDefinition))) == 2


@pytest.mark.parametrize(
    "line, error",
    [
        ("chrXI\tSGD\tgene\t1\t4", gff.MalformedRecordError),
        (_record("gene", 1, 4, "+", "Name=G1"), gff.MalformedRecordError),
        ("# a created from b 201399 by c (d)", gff.MalformedDateError),
        ("#  created from b 200101 by c (d)", gff.MalformedProvenanceError),
        ("# # orphan", gff.OrphanContinuationError),
    ]
)
def test_errors(line, error):
    """
    Malformed input aborts the whole conversion and the error names
    the offending line.
    """
    text = "\n".join([_record("gene", 1, 4, "+", "ID=G0"), line, ">seq", "acgt"])
    with pytest.raises(error, match="Line 2"):
        gff.get_document(_read(text))


def test_missing_sequence():
    text = _record("gene", 1, 4, "+", "ID=G1")
    with pytest.warns(UserWarning, match="no sequence"):
        document = gff.get_document(_read(text))
    assert str(document.getSequence(ROOT + "_seq/1").elements) == ""


def test_location_beyond_sequence():
    """
    The warning names the sequence from the header line.
    """
    text = "\n".join([_record("gene", 1, 40, "+", "ID=G1"), ">chrXI", "acgt"])
    with pytest.warns(UserWarning, match="beyond the length of sequence 'chrXI'"):
        gff.get_document(_read(text))


def test_empty_lines_are_ignored():
    text = "\n" + _record("gene", 1, 4, "+", "ID=G1") + "\n\n>seq\nacgt\n"
    document = gff.get_document(_read(text))
    assert len(_root(document).sequenceAnnotations) == 1


def test_custom_namespace():
    text = "\n".join([_record("CDS", 1, 4, "-", "ID=cds-1"), ">seq", "acgt"])
    document = gff.get_document(
        _read(text), contig_name="my contig", uri_prefix="http://example.com/"
    )
    graph = _parse(document)
    root = URIRef("http://example.com/my_contig/1")
    assert (root, RDF.type, SBOL.ComponentDefinition) in graph
    assert (root, SBOL.sequence, URIRef("http://example.com/my_contig_seq/1")) \
        in graph
    assert (
        URIRef("http://example.com/cds_1/1"), RDF.type, SBOL.ComponentDefinition
    ) in graph
    assert (
        root, SBOL.component,
        URIRef("http://example.com/my_contig/cds_1_component/1")
    ) in graph


def test_invalid_namespace():
    text = "\n".join([_record("CDS", 1, 4, "-", "ID=cds-1"), ">seq", "acgt"])
    with pytest.raises(ValueError):
        gff.get_document(_read(text), uri_prefix="http://example.com#")


def test_namespace_declarations():
    xml = gff.convert(join(data_dir("gff"), "yeast_segment.gff3"))
    assert f'xmlns:gff3="{sbol.GFF3_NS}"' in xml
    assert f'xmlns:rdfs="{sbol.RDFS_NS}"' in xml


def test_idempotence():
    path = join(data_dir("gff"), "yeast_segment.gff3")
    assert gff.convert(path) == gff.convert(path)


def test_idempotence_across_processes():
    """
    Separate processes produce byte-identical output, independent of
    the string hash seed.
    """
    path = join(data_dir("gff"), "yeast_segment.gff3")
    code = (
        "import sys, gffsbol.gff as gff; "
        "sys.stdout.write(gff.convert(sys.argv[1]))"
    )
    outputs = set()
    for seed in range(1, 5):
        env = dict(os.environ, PYTHONHASHSEED=str(seed))
        result = subprocess.run(
            [sys.executable, "-c", code, path],
            env=env, capture_output=True, text=True, check=True
        )
        outputs.add(result.stdout)
    assert len(outputs) == 1
