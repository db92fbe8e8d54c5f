# It is also possible to run the passes from Python code rather than from a YAML
# run file. This calls the two counting passes directly and shows the hard
# barrier between them: the group table is complete and filtered before
# induction starts.
#
# To launch this, use ``python -m examples.03_programmatic`` from the repository
# root, making sure that blindseg's setup.py has been run properly.

import os

from blindseg.chars import CharAcceptor
from blindseg.counting import count_groups, induce_words
from blindseg.filters import ThresholdFilter
from blindseg.output import write_results
from blindseg.ranking import rank
import blindseg.tee

EXP_DIR = os.path.dirname(__file__)
corpus = f"{EXP_DIR}/data/sample.zh.txt"
n = 2

blindseg.tee.set_out_file(f"{EXP_DIR}/logs/programmatic.log")

acceptor = CharAcceptor(extra_chars="“”")
threshold_filter = ThresholdFilter(threshold=1)

groups = count_groups(corpus, n, acceptor)
words = induce_words(corpus, n, acceptor, threshold_filter, groups)
threshold_filter.filter(words)

ranked = rank(words)
out_path = write_results(corpus, n, ranked, out_dir=f"{EXP_DIR}/output")
for text, count in ranked[:10]:
  print(f"{text}\t{count}")
print(f"wrote {len(ranked)} words to {out_path}")

blindseg.tee.unset_out_file()
