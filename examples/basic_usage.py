"""
Basic usage example for the TextKNN library.
"""

from textknn import TermQuery, TextKNN
from textknn.exceptions import ConfigurationError, NotTrainedError

TRAINING_DOCUMENTS = [
    {"body": "The striker scored a late goal to win the match", "topic": "sport", "lang": "en"},
    {"body": "The goalkeeper saved a penalty in the final match", "topic": "sport", "lang": "en"},
    {"body": "Fans cheered as the team won the league match", "topic": "sport", "lang": "en"},
    {"body": "The central bank raised interest rates again", "topic": "economy", "lang": "en"},
    {"body": "Inflation and interest rates worry the markets", "topic": "economy", "lang": "en"},
    {"body": "Markets fell after the bank rates announcement", "topic": "economy", "lang": "en"},
]


def main():
    """Demonstrate basic TextKNN usage."""

    print("🚀 TextKNN Basic Usage Example")
    print("=" * 40)

    # Example 1: Configuration validation
    print("\n1. Testing configuration validation...")
    try:
        TextKNN(k=0)
        print("❌ This should have failed!")
    except ConfigurationError as e:
        print("✅ Configuration validation working correctly:")
        print(f"   Error: {str(e)[:80]}...")

    with TextKNN(k=3, min_doc_freq=1, min_term_freq=1) as knn:
        # Example 2: Indexing
        print("\n2. Indexing labelled documents...")
        knn.add_documents(TRAINING_DOCUMENTS, keyword_fields=["topic", "lang"])
        print(f"✅ Indexed {knn.num_docs()} documents")

        # Example 3: Classifying before training fails
        print("\n3. Classifying before training...")
        try:
            knn.classify("interest rates")
        except NotTrainedError as e:
            print(f"✅ {e}")

        # Example 4: Train and classify
        print("\n4. Training on the 'body' field with 'topic' labels...")
        knn.train("body", "topic", query=TermQuery("lang", "en"))

        for text in ["who scored the winning goal", "bank interest rates rise"]:
            best = knn.classify(text)
            ranked = knn.rank(text)
            print(f"\n   Text: {text!r}")
            print(f"   Best class: {best.assigned_class if best else None}")
            for result in ranked:
                print(f"     {result.assigned_class:<10} {result.score:.3f}")

    print("\n🎉 Done")


if __name__ == "__main__":
    main()
