SAM_HEADER = (
    "@HD\tVN:1.6\tSO:coordinate\n"
    "@SQ\tSN:chr1\tLN:248956422\n"
    "@RG\tID:rg1\tSM:sample1\n"
    "@PG\tID:aligner\tPN:aligner\tVN:2.1\n"
    "@CO\tfree text: with colons\n"
)

SAM_RECORD = "read1\t99\tchr1\t100\t60\t8M\t=\t300\t208\tACGTACGT\tIIIIIIII\tNM:i:0\tZB:B:i,1,2,3"

SAM = SAM_HEADER + SAM_RECORD + "\n" + "read2\t4\t*\t0\t0\t*\t*\t0\t0\tACGT\t*\n"

PAF_RECORD = "q1\t1000\t10\t990\t+\tt1\t5000\t100\t1080\t950\t980\t60\ttp:A:P\tcm:i:80\tZT:B:f,0.5,1.5"

PAF = PAF_RECORD + "\n" + "q2\t500\t0\t500\t-\tt2\t800\t200\t700\t480\t500\t12\n"

GAF_RECORD = "read1\t6\t0\t6\t+\t>s2>s3>s4\t12\t2\t8\t6\t6\t60\tcg:Z:6M"

GAF = GAF_RECORD + "\n" + "*\t10\t0\t10\t+\t<chr1:5-8>foo:8-16\t11\t1\t11\t9\t10\t255\tZB:B:i,1,2\n"

GFA1 = (
    "H\tVN:Z:1.0\n"
    "S\t1\tACGT\tLN:i:4\n"
    "S\t2\t*\tLN:i:100\n"
    "L\t1\t+\t2\t-\t4M\n"
    "C\t1\t+\t2\t+\t1\t2M\n"
    "P\tp1\t1+,2-\t4M\n"
    "T\tp1\t0\t1\t+\t2\t-\t4M\n"
)

GFA2 = (
    "H\tVN:Z:2.0\n"
    "S\ts1\t4\tACGT\n"
    "S\ts2\t100\t*\tRC:i:5\n"
    "F\ts1\tread1+\t0\t4$\t10\t14\t4M\n"
    "E\te1\ts1+\ts2-\t2\t4$\t0\t2\t2M\n"
    "G\tg1\ts1+\ts2+\t500\t50\n"
    "O\to1\ts1+ s2-\n"
    "U\tu1\ts1 s2\n"
)

VCF = (
    "##fileformat=VCFv4.3\n"
    "##INFO=<ID=DP,Number=1,Type=Integer,Description=\"Total depth, all samples\">\n"
    "##FORMAT=<ID=GT,Number=1,Type=String,Description=\"Genotype\">\n"
    "##FILTER=<ID=q10,Description=\"Quality below 10\">\n"
    "##contig=<ID=chr1,length=248956422>\n"
    "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n"
    "chr1\t100\t.\tA\tG\t50\tPASS\tDP=10\n"
)
